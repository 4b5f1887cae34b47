"""
Number formatting for generated artifacts
"""

from decimal import Decimal, ROUND_HALF_UP


def format_fixed(value: float, places: int = 2) -> str:
    """
    Fixed-point text with ties rounded up (0.125 -> "0.13")

    The exact binary value of a float is rounded, so 1.005 (stored as
    1.00499...) still gives "1.00".
    """
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
