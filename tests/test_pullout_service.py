from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaError

from trackntoms.exceptions import (
    InsufficientStockError,
    InvalidStatusError,
    NotFoundError,
    ValidationError,
)
from trackntoms.pullout import models, schemas, service
from trackntoms.stock.adjustments import schemas as adjustment_schemas, service as adjustment_service


def pullout_in(ingredient, staff, manager, quantity, reason="spoiled"):
    return schemas.PulloutCreate(
        ingredient_id=ingredient.id,
        staff_id=staff.id,
        manager_id=manager.id,
        quantity=quantity,
        reason=reason,
    )


def test_oversized_request_is_accepted_then_refused_at_approval(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))

    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 10))
    assert pullout.status == "pending"
    assert stock_of(milk) == Decimal("4")

    with pytest.raises(InsufficientStockError) as exc:
        service.approve_pullout(db, pullout.id, manager.id)

    assert exc.value.available == Decimal("4")
    assert exc.value.requested == Decimal("10")
    db.refresh(pullout)
    assert pullout.status == "pending"
    assert pullout.approved_by is None
    assert stock_of(milk) == Decimal("4")


def test_approve_takes_stock_out(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, Decimal("1.5")))

    pullout = service.approve_pullout(db, pullout.id, manager.id)

    assert pullout.status == "approved"
    assert pullout.approved_by == manager.id
    assert isinstance(pullout.approved_at, datetime)
    assert stock_of(milk) == Decimal("2.5")

    with pytest.raises(InvalidStatusError):
        service.approve_pullout(db, pullout.id, manager.id)
    assert stock_of(milk) == Decimal("2.5")


def test_retry_approval_after_restock(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 10))

    with pytest.raises(InsufficientStockError):
        service.approve_pullout(db, pullout.id, manager.id)

    adjustment_service.create_adjustment(
        db,
        adjustment_schemas.StockAdjustmentCreate(
            ingredient_id=milk.id, quantity=8, reason="delivery count", adjusted_by=manager.id
        ),
    )
    service.approve_pullout(db, pullout.id, manager.id)

    assert stock_of(milk) == Decimal("2")


@pytest.mark.parametrize(
    "quantity, reason, message",
    [
        (0, "spoiled", "Quantity must be greater than zero"),
        (-1, "spoiled", "Quantity must be greater than zero"),
        (1, "   ", "Reason is required"),
    ],
)
def test_create_validation(db, staff, manager, ingredient_factory, quantity, reason, message):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))

    with pytest.raises(ValidationError) as exc:
        service.create_pullout(db, pullout_in(milk, staff, manager, quantity, reason))

    assert message in str(exc.value)
    assert db.query(models.Pullout).count() == 0


def test_create_unknown_ingredient(db, staff, manager):
    with pytest.raises(NotFoundError):
        service.create_pullout(
            db,
            schemas.PulloutCreate(
                ingredient_id=999, staff_id=staff.id, manager_id=manager.id, quantity=1, reason="spoiled"
            ),
        )


def test_reason_is_trimmed(db, staff, manager, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 1, "  expired  "))
    assert pullout.reason == "expired"


def test_edit_beyond_stock_is_refused(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 2))

    with pytest.raises(InsufficientStockError):
        service.update_pullout(db, pullout.id, schemas.PulloutUpdate(quantity=5))

    db.refresh(pullout)
    assert pullout.quantity == Decimal("2")
    assert stock_of(milk) == Decimal("4")


def test_edit_switching_ingredient_checks_the_new_one(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    sugar = ingredient_factory(name="Sugar", quantity=Decimal("1"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 2))

    with pytest.raises(InsufficientStockError) as exc:
        service.update_pullout(db, pullout.id, schemas.PulloutUpdate(ingredient_id=sugar.id))
    assert exc.value.ingredient_id == sugar.id

    pullout = service.update_pullout(
        db, pullout.id, schemas.PulloutUpdate(ingredient_id=sugar.id, quantity=1, reason="ants")
    )
    assert pullout.ingredient_id == sugar.id
    assert pullout.reason == "ants"
    assert stock_of(milk) == Decimal("4")
    assert stock_of(sugar) == Decimal("1")


def test_edit_without_target_change_skips_stock_check(db, staff, manager, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 10))

    pullout = service.update_pullout(db, pullout.id, schemas.PulloutUpdate(reason="dropped"))

    assert pullout.reason == "dropped"
    assert pullout.quantity == Decimal("10")


def test_only_pending_pullouts_can_be_edited(db, staff, manager, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 1))
    service.approve_pullout(db, pullout.id, manager.id)

    with pytest.raises(InvalidStatusError) as exc:
        service.update_pullout(db, pullout.id, schemas.PulloutUpdate(quantity=2))
    assert "already approved" in str(exc.value)


def test_delete_approved_pullout_restocks(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 3))
    service.approve_pullout(db, pullout.id, manager.id)
    assert stock_of(milk) == Decimal("1")

    assert service.delete_pullout(db, pullout.id)

    assert stock_of(milk) == Decimal("4")
    assert service.get_pullout(db, pullout.id) is None


def test_delete_pending_pullout_leaves_stock(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 3))

    service.delete_pullout(db, pullout.id)

    assert stock_of(milk) == Decimal("4")
    with pytest.raises(NotFoundError):
        service.delete_pullout(db, pullout.id)


def test_reject_then_approve_is_refused(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 1))

    pullout = service.reject_pullout(db, pullout.id, manager.id)
    assert pullout.status == "rejected"
    assert pullout.rejection_reason == "Not approved"

    with pytest.raises(InvalidStatusError):
        service.approve_pullout(db, pullout.id, manager.id)
    assert stock_of(milk) == Decimal("4")


def test_list_pullouts_by_status(db, staff, manager, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    first = service.create_pullout(db, pullout_in(milk, staff, manager, 1))
    service.create_pullout(db, pullout_in(milk, staff, manager, 1))
    service.approve_pullout(db, first.id, manager.id)

    assert len(service.list_pullouts(db)) == 2
    assert [p.id for p in service.list_pullouts(db, status="approved")] == [first.id]
    assert len(service.list_pullouts(db, status="pending")) == 1


def test_manager_is_required(staff, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    with pytest.raises(SchemaError):
        schemas.PulloutCreate(ingredient_id=milk.id, staff_id=staff.id, quantity=1, reason="spoiled")


def test_unknown_manager(db, staff, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    with pytest.raises(NotFoundError) as exc:
        service.create_pullout(
            db,
            schemas.PulloutCreate(
                ingredient_id=milk.id, staff_id=staff.id, manager_id=404, quantity=1, reason="spoiled"
            ),
        )
    assert exc.value.entity == "Staff"


def test_sub_cent_quantity_is_rounded(db, staff, manager, ingredient_factory, stock_of):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, "1.005"))
    assert pullout.quantity == Decimal("1.01")

    service.approve_pullout(db, pullout.id, manager.id)
    assert stock_of(milk) == Decimal("2.99")

    service.delete_pullout(db, pullout.id)
    assert stock_of(milk) == Decimal("4")


def test_edit_to_ingredient_zero_is_not_ignored(db, staff, manager, ingredient_factory):
    milk = ingredient_factory(name="Milk", quantity=Decimal("4"))
    pullout = service.create_pullout(db, pullout_in(milk, staff, manager, 1))

    with pytest.raises(NotFoundError) as exc:
        service.update_pullout(db, pullout.id, schemas.PulloutUpdate(ingredient_id=0))

    assert exc.value.entity_id == 0
    db.refresh(pullout)
    assert pullout.ingredient_id == milk.id
