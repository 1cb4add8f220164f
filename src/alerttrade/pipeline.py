# src/alerttrade/pipeline.py
from __future__ import annotations
import logging
from typing import Callable, Optional

from alerttrade.settings import Settings
from alerttrade.errors import AlertTradeError, SubmissionFailure
from alerttrade.exchanges.base import IBrokerClient
from alerttrade.exchanges.smartapi import SmartApiClient
from alerttrade.exchanges.fake import FakeBroker
from alerttrade.exchanges.session import SessionManager
from alerttrade.data.instruments import InstrumentResolver
from alerttrade.execution.sizing import size
from alerttrade.execution.executor import OrderSubmitter
from alerttrade.models.alert import Alert
from alerttrade.models.order import OrderResult

log = logging.getLogger("pipeline")


def make_broker(s: Settings) -> IBrokerClient:
    if s.paper:
        log.info("PAPER 모드: 실제 주문이 나가지 않습니다.")
        return FakeBroker()
    return SmartApiClient(
        api_key=s.smartapi.api_key,
        base_url=s.broker.base_url,
        timeout=s.broker.timeout_s,
        client_local_ip=s.broker.client_local_ip,
        client_public_ip=s.broker.client_public_ip,
        mac_address=s.broker.mac_address,
    )


def make_resolver(s: Settings) -> InstrumentResolver:
    return InstrumentResolver(
        url=s.instruments.url,
        timeout=s.instruments.timeout_s,
        exchange_segment=s.instruments.exchange_segment,
    )


class AlertPipeline:
    """로그인 → 종목 조회 → 수량 계산 → 주문. 실패는 로그로만 남기고 결과로 돌려준다."""

    def __init__(
        self,
        settings: Settings,
        broker_factory: Callable[[Settings], IBrokerClient] = make_broker,
        resolver: Optional[InstrumentResolver] = None,
    ):
        self.settings = settings
        self.broker_factory = broker_factory
        self.resolver = resolver or make_resolver(settings)

    def process(self, alert: Alert) -> OrderResult:
        s = self.settings
        try:
            broker = self.broker_factory(s)
            session = SessionManager(broker, s.smartapi).authenticate()
            instrument = self.resolver.lookup(alert.stock_name)
            qty = size(alert.price, s.order.available_funds)
            log.info(
                f"Placing order for {qty} shares of {alert.stock_name} "
                f"({instrument.trading_symbol}/{instrument.symbol_token})..."
            )
            return OrderSubmitter(broker, s.order, s.broker).submit(
                session, instrument, qty
            )
        except AlertTradeError as e:
            log.error(f"{e.kind}: {e}")
            if getattr(e, "payload", None):
                log.debug(f"{e.kind} payload: {e.payload}")
            return OrderResult.failed(e.kind)
        except Exception as e:
            log.exception(f"pipeline error: {e}")
            return OrderResult.failed(SubmissionFailure.kind)
