import logging
from typing import Optional
import typer
import uvicorn

from alerttrade.settings import Settings
from alerttrade.logging_config import setup as setup_logging
from alerttrade.execution.sizing import size as size_qty
from alerttrade.models.alert import Alert
from alerttrade.pipeline import AlertPipeline, make_resolver
from alerttrade.webhook import create_app

log = logging.getLogger("cli")

app = typer.Typer(help="alerttrade CLI")


@app.command()
def serve(
    config: str = "configs/credentials.yaml",
    host: Optional[str] = typer.Option(None, help="기본값: settings.webhook.host"),
    port: Optional[int] = typer.Option(None, help="기본값: settings.webhook.port"),
):
    s = Settings.load(config)
    setup_logging(s)
    host = host or s.webhook.host
    port = port or s.webhook.port
    log.info(f"webhook listening on {host}:{port}{s.webhook.path} (paper={s.paper})")
    uvicorn.run(
        create_app(s),
        host=host,
        port=port,
        log_config=None,  # 루트 로거 설정을 그대로 사용
    )


@app.command()
def resolve(name: str, config: str = "configs/credentials.yaml"):
    """종목명 → 거래 심볼/토큰 조회"""
    s = Settings.load(config)
    setup_logging(s)
    inst = make_resolver(s).resolve(name)
    if inst is None:
        typer.echo(f"not found: {name}")
        raise typer.Exit(code=1)
    typer.echo(f"{inst.trading_symbol}\t{inst.symbol_token}\t{inst.exch_seg}")


@app.command()
def alert(name: str, price: str, config: str = "configs/credentials.yaml"):
    """웹훅 없이 알림 1건을 직접 처리 (paper: true 권장)"""
    s = Settings.load(config)
    setup_logging(s)
    a = Alert.from_payload({"stockName": name, "price": price})
    if a is None:
        typer.echo("invalid alert: name/price required")
        raise typer.Exit(code=2)
    result = AlertPipeline(s).process(a)
    typer.echo(str(result))
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def size(price: float, funds: float = typer.Option(..., help="가용 자금")):
    typer.echo(str(size_qty(price, funds)))


if __name__ == "__main__":
    app()
