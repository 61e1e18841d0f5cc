from datetime import date
from decimal import Decimal

import pytest

from trackntoms.consignment import models, schemas, service
from trackntoms.exceptions import NotFoundError, ValidationError
from trackntoms.stock.ingredients.models import Ingredient


def consignment_in(supplier, manager, items, **kwargs):
    data = {
        "supplier_id": supplier.id,
        "manager_id": manager.id,
        "date": date(2026, 10, 2),
        "items": items,
    }
    data.update(kwargs)
    return schemas.ConsignmentIn(**data)


def quantities(db):
    return {i.id: i.quantity for i in db.query(Ingredient).all()}


def test_consignment_never_touches_ingredients(db, supplier, manager, item_factory, ingredient_factory):
    ingredient_factory(name="Coffee Beans", quantity=Decimal("10"))
    ensaymada = item_factory(item_name="Ensaymada")
    before = quantities(db)

    consignment = service.create_consignment(
        db,
        consignment_in(
            supplier,
            manager,
            [{"item_id": ensaymada.id, "quantity": 20, "supplier_price": 5}],
            invoice_number="INV-001",
        ),
    )

    assert consignment.total == Decimal("100.00")
    assert consignment.items[0].subtotal == Decimal("100.00")
    assert consignment.invoice_number == "INV-001"
    assert quantities(db) == before

    assert service.delete_consignment(db, consignment.id)
    assert quantities(db) == before
    assert db.query(models.ConsignmentItem).count() == 0


def test_zero_supplier_price_is_allowed(db, supplier, manager, item_factory):
    sample = item_factory(item_name="Sample Cookie")

    consignment = service.create_consignment(
        db, consignment_in(supplier, manager, [{"item_id": sample.id, "quantity": 3, "supplier_price": 0}])
    )

    assert consignment.total == Decimal("0.00")


def test_update_replaces_items_and_total(db, supplier, manager, item_factory):
    ensaymada = item_factory(item_name="Ensaymada")
    pandesal = item_factory(item_name="Pandesal")
    consignment = service.create_consignment(
        db, consignment_in(supplier, manager, [{"item_id": ensaymada.id, "quantity": 20, "supplier_price": 5}])
    )

    consignment = service.update_consignment(
        db,
        consignment.id,
        consignment_in(
            supplier,
            manager,
            [
                {"item_id": pandesal.id, "quantity": 50, "supplier_price": "1.25"},
                {"item_id": ensaymada.id, "quantity": 2, "supplier_price": 5},
            ],
            notes="second drop",
        ),
    )

    assert [line.item_id for line in consignment.items] == [pandesal.id, ensaymada.id]
    assert consignment.total == Decimal("72.50")
    assert consignment.notes == "second drop"
    assert db.query(models.ConsignmentItem).count() == 2


def test_submitted_total_is_ignored(db, supplier, manager, item_factory):
    ensaymada = item_factory(item_name="Ensaymada")

    consignment = service.create_consignment(
        db,
        consignment_in(
            supplier,
            manager,
            [{"item_id": ensaymada.id, "quantity": 20, "supplier_price": 5}],
            total="999.00",
        ),
    )

    assert consignment.total == Decimal("100.00")


def test_partial_item_is_rejected(db, supplier, manager, item_factory):
    ensaymada = item_factory(item_name="Ensaymada")

    with pytest.raises(ValidationError) as exc:
        service.create_consignment(
            db,
            consignment_in(
                supplier,
                manager,
                [
                    {"item_id": ensaymada.id, "quantity": 20, "supplier_price": 5},
                    {"item_id": ensaymada.id, "quantity": "", "supplier_price": 5},
                ],
            ),
        )

    assert "Item #2 is incomplete" in str(exc.value)
    assert db.query(models.Consignment).count() == 0


def test_unknown_item_and_missing_consignment(db, supplier, manager):
    with pytest.raises(NotFoundError):
        service.create_consignment(
            db, consignment_in(supplier, manager, [{"item_id": 404, "quantity": 1, "supplier_price": 1}])
        )
    with pytest.raises(NotFoundError):
        service.delete_consignment(db, 404)


def test_list_consignments_by_supplier(db, supplier, manager, item_factory):
    ensaymada = item_factory(item_name="Ensaymada")
    service.create_consignment(
        db, consignment_in(supplier, manager, [{"item_id": ensaymada.id, "quantity": 1, "supplier_price": 5}])
    )

    assert len(service.list_consignments(db, supplier_id=supplier.id)) == 1
    assert service.list_consignments(db, supplier_id=supplier.id + 1) == []
    assert service.list_consignments(db, start_date=date(2026, 10, 3)) == []
