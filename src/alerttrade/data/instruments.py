# src/alerttrade/data/instruments.py
from __future__ import annotations
import logging
from typing import Any, Optional
import requests

from alerttrade.errors import FetchFailure, SymbolNotFound
from alerttrade.models.order import Instrument
from alerttrade.settings import SCRIP_MASTER_URL

log = logging.getLogger("instruments")


def base_name(stock_name: str, delimiter: str = "-") -> str:
    """'RELIANCE-EQ' → 'RELIANCE' (첫 구분자 앞부분만 조회에 사용)"""
    return stock_name.split(delimiter, 1)[0].strip()


class InstrumentResolver:
    """
    스크립 마스터(JSON 배열 전체)를 매번 새로 받아 이름으로 찾는다.
    - 대소문자 무시, 완전 일치, 첫 번째 매치
    - 캐시 없음
    """

    def __init__(
        self,
        url: str = SCRIP_MASTER_URL,
        timeout: int = 30,
        exchange_segment: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.exchange_segment = exchange_segment.upper() if exchange_segment else None
        self.s = session or requests.Session()

    def fetch_master(self) -> list[dict[str, Any]]:
        try:
            r = self.s.get(self.url, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise FetchFailure(f"instrument master fetch failed: {e}") from e
        if not isinstance(data, list):
            raise FetchFailure(
                f"instrument master is not a list (got {type(data).__name__})"
            )
        log.debug(f"instrument master: {len(data)} records")
        return data

    def _matches(self, row: dict[str, Any], wanted: str) -> bool:
        if str(row.get("name", "")).upper() != wanted:
            return False
        if self.exchange_segment is not None:
            return str(row.get("exch_seg", "")).upper() == self.exchange_segment
        return True

    def lookup(self, stock_name: str) -> Instrument:
        wanted = base_name(stock_name).upper()
        if not wanted:
            # 빈 이름은 name 이 빈 레코드와 일치해 엉뚱한 종목이 주문된다
            raise SymbolNotFound(f"empty instrument name from {stock_name!r}")
        for row in self.fetch_master():
            if isinstance(row, dict) and self._matches(row, wanted):
                return Instrument(
                    trading_symbol=str(row["symbol"]),
                    symbol_token=str(row["token"]),
                    name=str(row.get("name", "")),
                    exch_seg=str(row.get("exch_seg", "")),
                )
        raise SymbolNotFound(f"no instrument named {wanted!r}")

    def resolve(self, stock_name: str) -> Optional[Instrument]:
        try:
            return self.lookup(stock_name)
        except FetchFailure as e:
            log.error(str(e))
        except SymbolNotFound as e:
            log.warning(str(e))
        return None
