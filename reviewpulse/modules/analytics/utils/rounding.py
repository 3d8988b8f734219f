from decimal import Decimal, ROUND_HALF_UP

ONE_DECIMAL = Decimal("0.1")


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place (2.25 -> 2.3, not banker's 2.2)"""
    return float(Decimal(str(value)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> float:
    """part/whole as a percentage rounded to one decimal; 0 when whole is 0"""
    if whole <= 0:
        return 0.0
    return round_one_decimal(part / whole * 100)
