# src/alerttrade/webhook.py
from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.concurrency import run_in_threadpool

from alerttrade.settings import Settings
from alerttrade.models.alert import Alert
from alerttrade.pipeline import AlertPipeline

log = logging.getLogger("webhook")

ACK = {"message": "Alert received successfully"}
OTHER_METHODS = ["GET", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"]


def received_at(tz: ZoneInfo, now: Optional[datetime] = None) -> datetime:
    """수신 시각(UTC) → 로그용 고정 시간대"""
    return (now or datetime.now(timezone.utc)).astimezone(tz)


def create_app(settings: Settings, pipeline: Optional[AlertPipeline] = None) -> FastAPI:
    app = FastAPI(title="alerttrade webhook")
    pipe = pipeline or AlertPipeline(settings)
    tz = ZoneInfo(settings.webhook.timezone)
    path = settings.webhook.path

    @app.post(path)
    async def receive_alert(request: Request):
        received = received_at(tz)
        log.info(f"Received webhook at ({settings.webhook.timezone}): {received:%Y-%m-%d %H:%M:%S}")

        body = await request.body()
        try:
            payload = json.loads(body) if body else None
        except ValueError:
            log.warning(f"Alert body is not JSON: {body[:200]!r}")
            payload = None
        log.info(f"Received alert: {payload}")

        alert = Alert.from_payload(payload)
        if alert is None:
            log.info("Alert ignored: stockName/price missing or invalid")
        else:
            # 파이프라인 결과와 무관하게 항상 200 (알림 발신측 재시도 방지)
            result = await run_in_threadpool(pipe.process, alert)
            log.info(f"Alert processed: {alert.stock_name} @ {alert.price} -> {result}")

        return JSONResponse(ACK, status_code=200)

    @app.api_route(path, methods=OTHER_METHODS, include_in_schema=False)
    async def method_not_allowed():
        return PlainTextResponse(
            "Method Not Allowed", status_code=405, headers={"Allow": "POST"}
        )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app
