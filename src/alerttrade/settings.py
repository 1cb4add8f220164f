# src/alerttrade/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional
import math
import os
import yaml

SCRIP_MASTER_URL = (
    "https://margincalculator.angelbroking.com/OpenAPI_File/files/OpenAPIScripMaster.json"
)

# 환경변수 → SmartAPI 섹션 키
ENV_OVERLAY = {
    "SMARTAPI_API_KEY": "api_key",
    "SMARTAPI_USERNAME": "username",
    "SMARTAPI_PASSWORD": "password",
    "SMARTAPI_TOTP_SEED": "demo_token",
}


class SmartApiCfg(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str
    username: str
    password: str
    demo_token: str  # TOTP 시드(base32)


class OrderDetailsCfg(BaseModel):
    model_config = ConfigDict(frozen=True)

    available_funds: float = 0.0
    transaction_type: Literal["BUY", "SELL"] = "BUY"
    product_type: str = "INTRADAY"

    @field_validator("available_funds", mode="before")
    @classmethod
    def _funds(cls, v):
        # 비었거나 숫자가 아니면 0 으로 간주
        try:
            funds = float(v)
        except (TypeError, ValueError):
            return 0.0
        return funds if math.isfinite(funds) else 0.0

    @field_validator("transaction_type", "product_type", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class WebhookCfg(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 8000
    path: str = "/"
    timezone: str = "Asia/Kolkata"


class BrokerCfg(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = "https://apiconnect.angelone.in"
    timeout_s: int = 10
    client_local_ip: str = "127.0.0.1"
    client_public_ip: str = "127.0.0.1"
    mac_address: str = "00:00:00:00:00:00"
    exchange: str = "NSE"
    variety: str = "NORMAL"


class LoggingCfg(BaseModel):
    model_config = ConfigDict(frozen=True)

    dir: str = "logs"
    filename: str = "alerts.log"
    console_level: str = "INFO"
    file_level: str = "DEBUG"
    namespace_level: str = "INFO"
    max_bytes: int = 5_000_000
    backup_count: int = 3

    @field_validator("console_level", "file_level", "namespace_level", mode="before")
    @classmethod
    def _level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class InstrumentsCfg(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = SCRIP_MASTER_URL
    timeout_s: int = 30
    exchange_segment: Optional[str] = None


class Settings(BaseSettings):
    smartapi: SmartApiCfg = Field(alias="SmartAPI")
    order: OrderDetailsCfg = Field(default_factory=OrderDetailsCfg, alias="OrderDetails")
    webhook: WebhookCfg = WebhookCfg()
    broker: BrokerCfg = BrokerCfg()
    instruments: InstrumentsCfg = InstrumentsCfg()
    logging: LoggingCfg = LoggingCfg()

    paper: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    @classmethod
    def load(cls, path: str):
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

        # 비밀값은 환경변수가 우선
        for env_name, key in ENV_OVERLAY.items():
            val = os.getenv(env_name)
            if val:
                if not cfg.get("SmartAPI"):
                    cfg["SmartAPI"] = {}
                cfg["SmartAPI"][key] = val

        return cls.model_validate(cfg)
