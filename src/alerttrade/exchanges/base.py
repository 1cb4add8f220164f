from typing import Protocol, Any
from alerttrade.models.order import BrokerSession


class IBrokerClient(Protocol):
    name: str

    def generate_session(
        self, username: str, password: str, totp: str
    ) -> dict[str, Any]: ...

    def place_order(self, session: BrokerSession, params: dict[str, Any]) -> str:
        """원본 응답 본문(text)을 그대로 돌려준다. 해석은 executor 몫."""
        ...
