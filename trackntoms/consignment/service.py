"""
Consignment records: supplier goods received on consignment.

Header and items are written as one unit exactly like purchases, but nothing
here ever calls the stock ledger. Deleting a consignment only deletes the
record; inventory levels are left as they are.
"""
from sqlalchemy.orm import Session, joinedload
from datetime import date
from decimal import Decimal
from typing import List, Optional

from loguru import logger

from trackntoms.consignment import models, schemas
from trackntoms.database import atomic
from trackntoms.exceptions import NotFoundError
from trackntoms.staff.service import require_staff
from trackntoms.stock.items.service import require_item
from trackntoms.suppliers.service import require_supplier
from trackntoms.utils import check_price, check_quantity, filled_lines, to_money, to_quantity


LINE_FIELDS = ("item_id", "quantity", "supplier_price")


def _build_items(db: Session, items: List[schemas.ConsignmentItemIn]) -> List[models.ConsignmentItem]:
    lines = []
    for position, item in filled_lines(items, LINE_FIELDS):
        quantity = to_quantity(item.quantity)
        check_quantity(position, quantity)
        check_price(position, item.supplier_price, allow_zero=True)
        require_item(db, item.item_id)
        supplier_price = to_money(item.supplier_price)

        lines.append(
            models.ConsignmentItem(
                item_id=item.item_id,
                quantity=quantity,
                supplier_price=supplier_price,
                subtotal=to_money(quantity * supplier_price),
                production_date=item.production_date,
            )
        )
    return lines


def _total(lines, submitted: Optional[Decimal], label: str) -> Decimal:
    total = to_money(sum((Decimal(str(line.subtotal)) for line in lines), Decimal("0")))
    if submitted is not None and to_money(submitted) != total:
        logger.warning(f"{label}: submitted total {submitted} ignored, items add up to {total}")
    return total


def _check_references(db: Session, data: schemas.ConsignmentIn):
    require_supplier(db, data.supplier_id)
    require_staff(db, data.manager_id)


def create_consignment(db: Session, data: schemas.ConsignmentIn):
    lines = _build_items(db, data.items)
    _check_references(db, data)

    with atomic(db):
        consignment = models.Consignment(
            supplier_id=data.supplier_id,
            manager_id=data.manager_id,
            date=data.date,
            invoice_number=data.invoice_number,
            reference_number=data.reference_number,
            notes=data.notes,
            total=_total(lines, data.total, "New consignment"),
        )
        db.add(consignment)
        db.flush()

        for line in lines:
            consignment.items.append(line)

    db.refresh(consignment)
    logger.info(f"Consignment {consignment.id} created: {len(lines)} item(s), total {consignment.total}")
    return consignment


def get_consignment(db: Session, consignment_id: int):
    return db.query(models.Consignment).filter(models.Consignment.id == consignment_id).first()


def list_consignments(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    supplier_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
):
    query = db.query(models.Consignment).options(joinedload(models.Consignment.items))
    if supplier_id:
        query = query.filter(models.Consignment.supplier_id == supplier_id)
    if start_date:
        query = query.filter(models.Consignment.date >= start_date)
    if end_date:
        query = query.filter(models.Consignment.date <= end_date)
    return (
        query
        .order_by(models.Consignment.date.desc(), models.Consignment.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_consignment(db: Session, consignment_id: int, data: schemas.ConsignmentIn):
    consignment = get_consignment(db, consignment_id)
    if not consignment:
        raise NotFoundError("Consignment", consignment_id)

    lines = _build_items(db, data.items)
    _check_references(db, data)

    with atomic(db):
        for line in list(consignment.items):
            consignment.items.remove(line)
        db.flush()

        consignment.supplier_id = data.supplier_id
        consignment.manager_id = data.manager_id
        consignment.date = data.date
        consignment.invoice_number = data.invoice_number
        consignment.reference_number = data.reference_number
        consignment.notes = data.notes

        for line in lines:
            consignment.items.append(line)
        consignment.total = _total(lines, data.total, f"Consignment {consignment_id}")

    db.refresh(consignment)
    logger.info(f"Consignment {consignment.id} updated: {len(lines)} item(s), total {consignment.total}")
    return consignment


def delete_consignment(db: Session, consignment_id: int):
    consignment = get_consignment(db, consignment_id)
    if not consignment:
        raise NotFoundError("Consignment", consignment_id)

    with atomic(db):
        for line in list(consignment.items):
            db.delete(line)
        db.delete(consignment)

    logger.info(f"Consignment {consignment_id} deleted (inventory levels untouched)")
    return True
