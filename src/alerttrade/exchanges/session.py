import logging
import pyotp

from alerttrade.errors import AuthFailure
from alerttrade.exchanges.base import IBrokerClient
from alerttrade.models.order import BrokerSession
from alerttrade.settings import SmartApiCfg

log = logging.getLogger("session")


class SessionManager:
    """주문마다 새로 로그인한다. 토큰은 저장하지 않는다."""

    def __init__(self, broker: IBrokerClient, creds: SmartApiCfg):
        self.broker = broker
        self.creds = creds

    def totp(self) -> str:
        return pyotp.TOTP(self.creds.demo_token).now()

    def authenticate(self) -> BrokerSession:
        try:
            code = self.totp()
            resp = self.broker.generate_session(
                self.creds.username, self.creds.password, code
            )
        except Exception as e:
            raise AuthFailure(f"session generation failed: {e}") from e

        if not isinstance(resp, dict) or resp.get("status") is False:
            raise AuthFailure("broker rejected login", payload=resp if isinstance(resp, dict) else None)

        data = resp.get("data") or {}
        try:
            session = BrokerSession(
                auth_token=data["jwtToken"],
                refresh_token=data["refreshToken"],
                feed_token=data.get("feedToken"),
            )
        except KeyError as e:
            raise AuthFailure(f"login response missing {e}", payload=resp) from e

        log.info(f"authenticated as {self.creds.username} via {self.broker.name}")
        return session
