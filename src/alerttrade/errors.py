class AlertTradeError(Exception):
    """파이프라인 단계 실패의 공통 부모. 웹훅까지 전파되지 않는다."""

    kind = "AlertTradeError"


class FetchFailure(AlertTradeError):
    kind = "FetchFailure"


class SymbolNotFound(AlertTradeError):
    kind = "SymbolNotFound"


class AuthFailure(AlertTradeError):
    kind = "AuthFailure"

    def __init__(self, message: str, payload: dict | None = None):
        super().__init__(message)
        self.payload = payload


class SubmissionFailure(AlertTradeError):
    kind = "SubmissionFailure"


class OrderRejected(AlertTradeError):
    kind = "OrderRejected"

    def __init__(self, message: str, payload: dict | None = None):
        super().__init__(message)
        self.payload = payload
