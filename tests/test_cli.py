from pathlib import Path
from typer.testing import CliRunner

from alerttrade.cli import app
from alerttrade.data.instruments import InstrumentResolver
from alerttrade.models.order import Instrument

runner = CliRunner()

YAML = """
SmartAPI:
  api_key: k
  username: A1
  password: pw
  demo_token: JBSWY3DPEHPK3PXP
OrderDetails:
  available_funds: 100000
paper: true
"""


def _config(tmp_path: Path) -> str:
    p = tmp_path / "credentials.yaml"
    p.write_text(YAML, encoding="utf-8")
    return str(p)


def test_cli_size():
    result = runner.invoke(app, ["size", "2500", "--funds", "100000"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "40"


def test_cli_resolve(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        InstrumentResolver,
        "resolve",
        lambda self, name: Instrument("INFY-EQ", "1594", "INFY", "NSE") if name == "infy" else None,
    )
    cfg = _config(tmp_path)
    ok = runner.invoke(app, ["resolve", "infy", "--config", cfg])
    assert ok.exit_code == 0, ok.output
    assert "INFY-EQ\t1594" in ok.output

    missing = runner.invoke(app, ["resolve", "nope", "--config", cfg])
    assert missing.exit_code == 1


def test_cli_alert_paper(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        InstrumentResolver,
        "lookup",
        lambda self, name: Instrument("RELIANCE-EQ", "2885", "RELIANCE", "NSE"),
    )
    cfg = _config(tmp_path)
    result = runner.invoke(app, ["alert", "RELIANCE-EQ", "2500", "--config", cfg])
    assert result.exit_code == 0, result.output
    assert "success=True" in result.output

    bad = runner.invoke(app, ["alert", "RELIANCE-EQ", "abc", "--config", cfg])
    assert bad.exit_code == 2
