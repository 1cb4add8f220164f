from __future__ import annotations
import logging
from datetime import datetime, tzinfo
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from alerttrade.settings import LoggingCfg, Settings


DEFAULT_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FMT = "%(asctime)s | %(levelname)s | %(message)s"

NAMESPACES = (
    "webhook",
    "pipeline",
    "broker",
    "session",
    "instruments",
    "executor",
    "sizing",
    "cli",
)


class ZoneFormatter(logging.Formatter):
    """asctime 을 서버 TZ 가 아닌 고정 시간대(기본 IST)로 찍는다."""

    def __init__(self, fmt: str, tz: tzinfo):
        super().__init__(fmt)
        self.tz = tz

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="milliseconds")


def build_handlers(cfg: LoggingCfg, tz: tzinfo) -> list[logging.Handler]:
    Path(cfg.dir).mkdir(parents=True, exist_ok=True)

    ch = logging.StreamHandler()
    ch.setLevel(cfg.console_level)
    ch.setFormatter(ZoneFormatter(CONSOLE_FMT, tz))

    # 주문 결과는 로그로만 남으므로 파일 보관
    fh = RotatingFileHandler(
        Path(cfg.dir) / cfg.filename,
        maxBytes=cfg.max_bytes,
        backupCount=cfg.backup_count,
        encoding="utf-8",
    )
    fh.setLevel(cfg.file_level)
    fh.setFormatter(ZoneFormatter(DEFAULT_FMT, tz))
    return [ch, fh]


def setup(settings: Optional[Settings] = None) -> None:
    root = logging.getLogger()
    # 중복 핸들러 방지 (uvicorn reload, 테스트 반복 호출)
    if getattr(root, "_alerttrade_logging_installed", False):
        return

    cfg = settings.logging if settings is not None else LoggingCfg()
    tz = ZoneInfo(settings.webhook.timezone if settings is not None else "Asia/Kolkata")

    root.setLevel(logging.DEBUG)
    for h in build_handlers(cfg, tz):
        root.addHandler(h)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    for name in NAMESPACES:
        logging.getLogger(name).setLevel(cfg.namespace_level)

    root._alerttrade_logging_installed = True  # type: ignore[attr-defined]
