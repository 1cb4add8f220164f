import json
import logging
from typing import Any

from alerttrade.errors import OrderRejected
from alerttrade.exchanges.base import IBrokerClient
from alerttrade.models.order import (
    BrokerSession,
    Instrument,
    OrderRequest,
    OrderResponse,
    OrderResult,
)
from alerttrade.settings import BrokerCfg, OrderDetailsCfg

log = logging.getLogger("executor")


def decode_order_response(raw: str | bytes) -> OrderResponse:
    """
    주문 응답 본문 → OrderResponse.
    SmartAPI 는 JSON 객체를 다시 문자열로 감싸 보내기도 하므로 문자열이면 한 번 더 푼다.
    """
    payload: Any = json.loads(raw)
    if isinstance(payload, str):
        payload = json.loads(payload)
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected order response: {payload!r}")
    data = payload.get("data")
    return OrderResponse(
        status=bool(payload.get("status")),
        message=str(payload.get("message") or ""),
        errorcode=str(payload.get("errorcode") or ""),
        data=data if isinstance(data, dict) else {},
    )


class OrderSubmitter:
    def __init__(
        self,
        broker: IBrokerClient,
        order_cfg: OrderDetailsCfg,
        broker_cfg: BrokerCfg = BrokerCfg(),
    ):
        self.broker = broker
        self.order_cfg = order_cfg
        self.broker_cfg = broker_cfg

    def build(self, instrument: Instrument, quantity: int) -> OrderRequest:
        return OrderRequest.market(
            instrument,
            side=self.order_cfg.transaction_type,
            product=self.order_cfg.product_type,
            qty=quantity,
            exchange=self.broker_cfg.exchange,
            variety=self.broker_cfg.variety,
        )

    def submit(
        self, session: BrokerSession, instrument: Instrument, quantity: int
    ) -> OrderResult:
        try:
            req = self.build(instrument, quantity)
            raw = self.broker.place_order(session, req.to_params())
            resp = decode_order_response(raw)
        except Exception as e:
            log.error(f"Order placement failed: {e}")
            return OrderResult.failed("SubmissionFailure")

        ts = resp.order_creation_time
        if not ts:
            err = OrderRejected(
                f"no orderCreationTime (message={resp.message!r}, errorcode={resp.errorcode!r})",
                payload=resp.data,
            )
            log.error(f"Order placement failed: {err}")
            return OrderResult.failed(err.kind)

        log.info(
            f"Order placed successfully at: {ts} "
            f"({req.transactiontype} {req.quantity} {req.tradingsymbol}, id={resp.order_id})"
        )
        return OrderResult(success=True, creation_timestamp=ts, order_id=resp.order_id)
