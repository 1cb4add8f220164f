from decimal import Decimal


def size(price: float, available_funds: float) -> int:
    """floor(funds / price), 최소 1주. 자금이 가격보다 작아도 1주는 주문한다."""
    p = Decimal(str(price))
    if p <= 0:
        raise ValueError(f"price must be positive: {price}")
    funds = Decimal(str(available_funds))
    return max(int(funds / p), 1)
