from __future__ import annotations
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


@dataclass(frozen=True)
class Alert:
    stock_name: str
    price: float

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Alert"]:
        """
        웹훅 본문 → Alert. stockName/price 가 비었거나 가격이 양수로
        해석되지 않으면 None (조용히 무시할 알림).
        """
        if not isinstance(payload, dict):
            return None
        name = str(payload.get("stockName") or "").strip()
        raw_price = payload.get("price")
        if not name or not raw_price or isinstance(raw_price, bool):
            return None
        try:
            price = float(Decimal(str(raw_price).strip()))
        except (InvalidOperation, ValueError):
            return None
        # float 변환 뒤에 검사 ("1e-400" → 0.0)
        if not math.isfinite(price) or price <= 0:
            return None
        return cls(stock_name=name, price=price)
