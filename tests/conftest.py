import json
import pytest
import requests

from alerttrade.settings import Settings

MASTER = [
    {"token": "2885", "symbol": "RELIANCE-EQ", "name": "RELIANCE", "exch_seg": "NSE"},
    {"token": "500325", "symbol": "RELIANCE", "name": "RELIANCE", "exch_seg": "BSE"},
    {"token": "1594", "symbol": "INFY-EQ", "name": "INFY", "exch_seg": "NSE"},
    {"token": "11536", "symbol": "TCS-EQ", "name": "TCS", "exch_seg": "NSE"},
]


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status={self.status_code}", response=self)


class FakeHttp:
    """requests.Session 대역: 호출을 기록하고 미리 정한 응답/예외를 돌려준다."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def _call(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response

    def get(self, url, **kwargs):
        return self._call("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._call("POST", url, **kwargs)


@pytest.fixture
def master_http():
    return FakeHttp(FakeResponse(200, MASTER))


@pytest.fixture
def settings():
    return Settings.model_validate(
        {
            "SmartAPI": {
                "api_key": "K",
                "username": "A1234567",
                "password": "1234",
                "demo_token": "JBSWY3DPEHPK3PXP",
            },
            "OrderDetails": {
                "available_funds": "100000",
                "transaction_type": "buy",
                "product_type": "intraday",
            },
        }
    )
