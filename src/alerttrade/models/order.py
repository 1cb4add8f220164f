from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Instrument:
    trading_symbol: str
    symbol_token: str
    name: str = ""
    exch_seg: str = ""


@dataclass(frozen=True)
class BrokerSession:
    auth_token: str
    refresh_token: str
    feed_token: Optional[str] = None


@dataclass(frozen=True)
class OrderRequest:
    tradingsymbol: str
    symboltoken: str
    transactiontype: str  # "BUY" | "SELL"
    producttype: str
    quantity: int
    exchange: str = "NSE"
    variety: str = "NORMAL"
    ordertype: str = "MARKET"
    duration: str = "DAY"
    # 시장가 주문만 다루므로 가격/브래킷 필드는 항상 "0"
    price: str = "0"
    squareoff: str = "0"
    stoploss: str = "0"

    @classmethod
    def market(
        cls,
        instrument: Instrument,
        side: str,
        product: str,
        qty: int,
        exchange: str = "NSE",
        variety: str = "NORMAL",
    ):
        return cls(
            tradingsymbol=instrument.trading_symbol,
            symboltoken=instrument.symbol_token,
            transactiontype=side.upper(),
            producttype=product,
            quantity=qty,
            exchange=exchange,
            variety=variety,
        )

    def to_params(self) -> dict[str, Any]:
        return {
            "variety": self.variety,
            "tradingsymbol": self.tradingsymbol,
            "symboltoken": self.symboltoken,
            "transactiontype": self.transactiontype,
            "exchange": self.exchange,
            "ordertype": self.ordertype,
            "producttype": self.producttype,
            "duration": self.duration,
            "price": self.price,
            "squareoff": self.squareoff,
            "stoploss": self.stoploss,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class OrderResponse:
    status: bool
    message: str = ""
    errorcode: str = ""
    data: dict = field(default_factory=dict)

    @property
    def order_creation_time(self) -> Optional[str]:
        ts = self.data.get("orderCreationTime")
        return str(ts) if ts else None

    @property
    def order_id(self) -> Optional[str]:
        oid = self.data.get("orderid")
        return str(oid) if oid else None


@dataclass(frozen=True)
class OrderResult:
    success: bool
    creation_timestamp: Optional[str] = None
    order_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str):
        return cls(success=False, error=error)
