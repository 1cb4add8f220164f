# src/alerttrade/exchanges/smartapi.py
from __future__ import annotations
from typing import Any, Dict, Optional
import logging
import requests

from alerttrade.models.order import BrokerSession

log = logging.getLogger("broker")

BASE = "https://apiconnect.angelone.in"

ROUTES = {
    "login": "/rest/auth/angelbroking/user/v1/loginByPassword",
    "place_order": "/rest/secure/angelbroking/order/v1/placeOrder",
}


class SmartApiClient:
    """Angel One SmartAPI REST (로그인 + 주문). 재시도 없음."""

    name = "smartapi"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE,
        timeout: int = 10,
        client_local_ip: str = "127.0.0.1",
        client_public_ip: str = "127.0.0.1",
        mac_address: str = "00:00:00:00:00:00",
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base = base_url.rstrip("/")
        self.timeout = timeout
        self.client_local_ip = client_local_ip
        self.client_public_ip = client_public_ip
        self.mac_address = mac_address
        self.s = session or requests.Session()

    def _headers(self, auth_token: str | None = None) -> Dict[str, str]:
        h = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-UserType": "USER",
            "X-SourceID": "WEB",
            "X-ClientLocalIP": self.client_local_ip,
            "X-ClientPublicIP": self.client_public_ip,
            "X-MACAddress": self.mac_address,
            "X-PrivateKey": self.api_key,
        }
        if auth_token:
            h["Authorization"] = f"Bearer {auth_token}"
        return h

    def _post(
        self, route: str, body: Dict[str, Any], auth_token: str | None = None
    ) -> requests.Response:
        r = self.s.post(
            f"{self.base}{ROUTES[route]}",
            json=body,
            headers=self._headers(auth_token),
            timeout=self.timeout,
        )
        log.debug(f"POST {route} -> {r.status_code}")
        r.raise_for_status()
        return r

    def generate_session(self, username: str, password: str, totp: str) -> Dict[str, Any]:
        r = self._post(
            "login", {"clientcode": username, "password": password, "totp": totp}
        )
        return r.json()

    def place_order(self, session: BrokerSession, params: Dict[str, Any]) -> str:
        # 본문이 JSON 문자열로 한 번 더 감싸져 오는 경우가 있어 text 그대로 넘긴다
        r = self._post("place_order", params, auth_token=session.auth_token)
        return r.text
