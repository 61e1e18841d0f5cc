from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence, Tuple, TypeVar

import pytz

from trackntoms.config import settings
from trackntoms.exceptions import ValidationError

TWO_PLACES = Decimal("0.01")

T = TypeVar("T")


def to_money(value) -> Decimal:
    """Fixed 2-decimal amount, half-up like DECIMAL(12,2)."""
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_quantity(value) -> Decimal:
    """Quantity at the 2-decimal scale the ledger stores, half-up.

    Stock is moved by exactly what gets written to the line, so a later
    reversal takes back the same amount.
    """
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def local_now() -> datetime:
    return datetime.now(pytz.timezone(settings.TIMEZONE))


def local_today() -> date:
    return local_now().date()


def filled_lines(lines: Iterable[T], required: Sequence[str]) -> List[Tuple[int, T]]:
    """
    Keep the line items that are completely filled in.

    Blank rows are dropped, a row with only some of ``required`` set is
    rejected, and at least one row must remain. Returns (position, line)
    pairs, position being 1-based as shown on the form.
    """
    result = []
    for position, line in enumerate(lines, start=1):
        values = [getattr(line, field) for field in required]
        if all(value is None for value in values):
            continue
        if any(value is None for value in values):
            raise ValidationError(
                f"Item #{position} is incomplete. Please fill all required fields or remove it."
            )
        result.append((position, line))

    if not result:
        raise ValidationError("At least one item is required")
    return result


def check_quantity(position: int, quantity: Decimal):
    if quantity <= 0:
        raise ValidationError(f"Item #{position}: Quantity must be greater than zero")


def check_price(position: int, price: Decimal, allow_zero: bool = False):
    if price < 0:
        raise ValidationError(f"Item #{position}: Price cannot be negative")
    if price == 0 and not allow_zero:
        raise ValidationError(f"Item #{position}: Price must be greater than zero")
    if price > settings.MAX_UNIT_PRICE:
        raise ValidationError(f"Item #{position}: Unit price exceeds maximum allowed value")
