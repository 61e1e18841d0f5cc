from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text

from trackntoms.database import atomic
from trackntoms.exceptions import InsufficientStockError, NotFoundError, TransactionError
from trackntoms.stock import ledger


def test_adjust_applies_delta_and_restock_date(db, ingredient_factory, stock_of):
    beans = ingredient_factory(name="Coffee Beans", quantity=Decimal("10"))

    with atomic(db):
        ledger.adjust(db, beans.id, Decimal("2.5"), restocked_on=date(2026, 10, 1))

    assert stock_of(beans) == Decimal("12.5")
    assert beans.last_restock_date == date(2026, 10, 1)


def test_adjust_unknown_ingredient(db):
    with pytest.raises(NotFoundError) as exc:
        with atomic(db):
            ledger.adjust(db, 999, 1)
    assert exc.value.entity == "Ingredient"
    assert exc.value.to_dict()["code"] == "not_found"


def test_adjust_and_validate_refuses_negative(db, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))

    with pytest.raises(InsufficientStockError) as exc:
        with atomic(db):
            ledger.adjust_and_validate(db, milk.id, Decimal("-10"))

    assert exc.value.available == Decimal("4")
    assert exc.value.requested == Decimal("10")
    assert exc.value.to_dict()["available"] == 4.0
    assert stock_of(milk) == Decimal("4")


def test_adjust_and_validate_allows_exact_amount(db, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))

    with atomic(db):
        ledger.adjust_and_validate(db, milk.id, Decimal("-4"))

    assert stock_of(milk) == 0


def test_ensure_non_negative_reports_pre_unit_quantity(db, ingredient_factory, stock_of):
    sugar = ingredient_factory(name="Sugar", quantity=Decimal("3"))

    with pytest.raises(InsufficientStockError) as exc:
        with atomic(db):
            ledger.adjust(db, sugar.id, Decimal("-5"))
            ledger.ensure_non_negative(db, ledger.net_deltas((sugar.id, Decimal("-5"))))

    assert exc.value.available == Decimal("3")
    assert stock_of(sugar) == Decimal("3")


def test_net_deltas_sums_per_ingredient():
    totals = ledger.net_deltas((1, Decimal("-5")), (2, 1), (1, Decimal("3")))
    assert totals == {1: Decimal("-2"), 2: Decimal("1")}


def test_atomic_wraps_storage_errors(db, ingredient_factory, stock_of):
    beans = ingredient_factory(name="Coffee Beans", quantity=Decimal("10"))

    with pytest.raises(TransactionError):
        with atomic(db):
            ledger.adjust(db, beans.id, 5)
            db.execute(text("INSERT INTO no_such_table VALUES (1)"))

    assert stock_of(beans) == Decimal("10")
