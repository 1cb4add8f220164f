import json
import time
from typing import Any
from alerttrade.models.order import BrokerSession


class FakeBroker:
    """paper 모드/테스트용 브로커. 실제 주문은 나가지 않는다."""

    name = "fake"

    def __init__(self, accept: bool = True, login_ok: bool = True):
        self.accept = accept
        self.login_ok = login_ok
        self._order_seq = 0
        self.orders: list[dict[str, Any]] = []

    def generate_session(self, username: str, password: str, totp: str) -> dict[str, Any]:
        if not self.login_ok:
            return {
                "status": False,
                "message": "Invalid totp",
                "errorcode": "AB1050",
                "data": None,
            }
        return {
            "status": True,
            "message": "SUCCESS",
            "errorcode": "",
            "data": {
                "jwtToken": f"PAPER-JWT-{username}",
                "refreshToken": "PAPER-REFRESH",
                "feedToken": "PAPER-FEED",
            },
        }

    def place_order(self, session: BrokerSession, params: dict[str, Any]) -> str:
        self.orders.append(dict(params))
        if not self.accept:
            body = {"status": False, "message": "Order rejected", "errorcode": "AB4008", "data": {}}
            return json.dumps(body)
        self._order_seq += 1
        body = {
            "status": True,
            "message": "SUCCESS",
            "errorcode": "",
            "data": {
                "orderid": f"P{self._order_seq}",
                "script": params.get("tradingsymbol"),
                "orderCreationTime": time.strftime("%d-%b-%Y %H:%M:%S"),
            },
        }
        return json.dumps(body)
