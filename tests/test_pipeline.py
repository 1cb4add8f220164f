import requests

from alerttrade.data.instruments import InstrumentResolver
from alerttrade.exchanges.fake import FakeBroker
from alerttrade.models.alert import Alert
from alerttrade.pipeline import AlertPipeline, make_broker
from alerttrade.exchanges.smartapi import SmartApiClient

from conftest import FakeHttp


def _pipeline(settings, broker, http):
    return AlertPipeline(
        settings,
        broker_factory=lambda s: broker,
        resolver=InstrumentResolver(session=http),
    )


def test_end_to_end_success(settings, master_http):
    broker = FakeBroker()
    result = _pipeline(settings, broker, master_http).process(
        Alert("RELIANCE-EQ", 2500.0)
    )
    assert result.success
    assert result.creation_timestamp
    assert broker.orders[0]["quantity"] == 40
    assert broker.orders[0]["tradingsymbol"] == "RELIANCE-EQ"
    assert broker.orders[0]["symboltoken"] == "2885"


def test_symbol_not_found_places_no_order(settings, master_http):
    broker = FakeBroker()
    result = _pipeline(settings, broker, master_http).process(Alert("NOSUCH", 10.0))
    assert result.error == "SymbolNotFound"
    assert broker.orders == []


def test_master_fetch_failure_places_no_order(settings, monkeypatch):
    calls = []
    monkeypatch.setattr(FakeBroker, "place_order", lambda self, s, p: calls.append(p))
    http = FakeHttp(exc=requests.ConnectionError("dns"))
    result = _pipeline(settings, FakeBroker(), http).process(Alert("INFY", 1500.0))
    assert result.error == "FetchFailure"
    assert calls == []


def test_auth_failure_skips_lookup(settings, master_http):
    broker = FakeBroker(login_ok=False)
    result = _pipeline(settings, broker, master_http).process(Alert("INFY", 1500.0))
    assert result.error == "AuthFailure"
    assert master_http.calls == []
    assert broker.orders == []


def test_make_broker_respects_paper_flag(settings):
    assert isinstance(make_broker(settings), SmartApiClient)
    paper = settings.model_copy(update={"paper": True})
    assert isinstance(make_broker(paper), FakeBroker)
