from alerttrade.models.alert import Alert


def test_valid_payloads():
    assert Alert.from_payload({"stockName": "INFY", "price": 1500}) == Alert("INFY", 1500.0)
    assert Alert.from_payload({"stockName": "INFY", "price": "1500.5"}).price == 1500.5


def test_missing_or_invalid_fields_are_dropped():
    for payload in (
        None,
        [],
        {},
        {"stockName": "INFY"},
        {"price": 100},
        {"stockName": "", "price": 100},
        {"stockName": "INFY", "price": 0},
        {"stockName": "INFY", "price": "abc"},
        {"stockName": "INFY", "price": "-5"},
        {"stockName": "INFY", "price": True},
    ):
        assert Alert.from_payload(payload) is None, payload


def test_blank_name_after_strip_is_dropped():
    assert Alert.from_payload({"stockName": "   ", "price": 100}) is None
    assert Alert.from_payload({"stockName": " INFY ", "price": 100}).stock_name == "INFY"


def test_price_that_underflows_or_overflows_float_is_dropped():
    assert Alert.from_payload({"stockName": "INFY", "price": "1e-400"}) is None
    assert Alert.from_payload({"stockName": "INFY", "price": "1e400"}) is None
    assert Alert.from_payload({"stockName": "INFY", "price": "sNaN"}) is None
    assert Alert.from_payload({"stockName": "INFY", "price": "NaN"}) is None
