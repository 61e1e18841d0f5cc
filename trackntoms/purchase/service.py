from sqlalchemy.orm import Session, joinedload
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from loguru import logger

from trackntoms.config import settings
from trackntoms.database import atomic
from trackntoms.exceptions import InvalidStatusError, NotFoundError
from trackntoms.purchase import models as purchase_models, schemas as purchase_schemas
from trackntoms.staff.service import require_staff
from trackntoms.stock import ledger
from trackntoms.stock.ingredients.models import Ingredient
from trackntoms.suppliers.service import require_supplier
from trackntoms.utils import (
    check_price,
    check_quantity,
    filled_lines,
    local_now,
    to_money,
    to_quantity,
)


PENDING = "pending"
APPROVED = "approved"

LINE_FIELDS = ("ingredient_id", "quantity", "unit_price")


def _build_lines(items: List[purchase_schemas.PurchaseItemIn]) -> List[purchase_models.PurchaseItem]:
    """Validate the submitted rows and price them. No database access."""
    lines = []
    for position, item in filled_lines(items, LINE_FIELDS):
        quantity = to_quantity(item.quantity)
        check_quantity(position, quantity)
        check_price(position, item.unit_price)
        unit_price = to_money(item.unit_price)

        lines.append(
            purchase_models.PurchaseItem(
                ingredient_id=item.ingredient_id,
                quantity=quantity,
                unit_price=unit_price,
                subtotal=to_money(quantity * unit_price),
                product_expiration_date=item.product_expiration_date,
            )
        )
    return lines


def _total(lines) -> Decimal:
    return to_money(sum((Decimal(str(line.subtotal)) for line in lines), Decimal("0")))


def _apply_lines(db: Session, purchase: purchase_models.Purchase, lines, sign: int):
    """Add (sign=1) or reverse (sign=-1) every line's quantity."""
    restocked_on = purchase.purchase_date.date() if sign > 0 else None
    for line in lines:
        ledger.adjust(db, line.ingredient_id, sign * Decimal(str(line.quantity)), restocked_on=restocked_on)


def _require_ingredients(db: Session, lines):
    for ingredient_id in sorted({line.ingredient_id for line in lines}):
        if not db.query(Ingredient.id).filter(Ingredient.id == ingredient_id).first():
            raise NotFoundError("Ingredient", ingredient_id)


def _load_purchase(db: Session, purchase_id: int) -> purchase_models.Purchase:
    purchase = get_purchase(db, purchase_id)
    if not purchase:
        raise NotFoundError("Purchase", purchase_id)
    return purchase


def create_purchase(
    db: Session,
    purchase: purchase_schemas.PurchaseCreate,
    require_approval: Optional[bool] = None,
):
    if require_approval is None:
        require_approval = settings.PURCHASE_REQUIRES_APPROVAL

    # Validation before any write
    lines = _build_lines(purchase.items)
    require_supplier(db, purchase.supplier_id)
    require_staff(db, purchase.staff_id)
    _require_ingredients(db, lines)

    with atomic(db):
        # 1️⃣ Header
        db_purchase = purchase_models.Purchase(
            supplier_id=purchase.supplier_id,
            created_by=purchase.staff_id,
            purchase_date=purchase.purchase_date,
            notes=purchase.notes,
            status=PENDING,
            total_amount=_total(lines),
            stock_applied=False,
        )
        db.add(db_purchase)
        db.flush()

        # 2️⃣ Lines
        for line in lines:
            db_purchase.items.append(line)
        db.flush()

        # 3️⃣ Stock in, unless the order waits for approval
        if not require_approval:
            _apply_lines(db, db_purchase, lines, sign=1)
            db_purchase.stock_applied = True

    db.refresh(db_purchase)
    logger.info(
        f"Purchase {db_purchase.id} created: {len(lines)} line(s), total {db_purchase.total_amount}, "
        f"stock applied={db_purchase.stock_applied}"
    )
    return db_purchase


def list_purchases(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    supplier_id: int | None = None,
    status: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
):
    query = db.query(purchase_models.Purchase).options(joinedload(purchase_models.Purchase.items))

    if supplier_id:
        query = query.filter(purchase_models.Purchase.supplier_id == supplier_id)

    if status:
        query = query.filter(purchase_models.Purchase.status == status)

    # ===============================
    # DATE RANGE FILTER
    # ===============================
    if start_date:
        start_dt = datetime.combine(start_date, datetime.min.time())
        query = query.filter(purchase_models.Purchase.purchase_date >= start_dt)

    if end_date:
        end_dt = datetime.combine(end_date, datetime.min.time()) + timedelta(days=1)
        query = query.filter(purchase_models.Purchase.purchase_date < end_dt)

    return (
        query
        .order_by(purchase_models.Purchase.purchase_date.desc(), purchase_models.Purchase.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_purchase(db: Session, purchase_id: int):
    return db.query(purchase_models.Purchase).filter(
        purchase_models.Purchase.id == purchase_id
    ).first()


def update_purchase(
    db: Session,
    purchase_id: int,
    update_data: purchase_schemas.PurchaseUpdate,
):
    """
    Full replace of the purchase lines.

    Every old line is reversed even when the new lines use other
    ingredients, then the new lines are applied, so system stock stays
    consistent across an edit that swaps ingredients.
    """
    purchase = _load_purchase(db, purchase_id)
    new_lines = _build_lines(update_data.items)
    require_supplier(db, update_data.supplier_id)
    _require_ingredients(db, new_lines)

    with atomic(db):
        old_lines = list(purchase.items)
        changes = []

        # ===============================
        # INVENTORY: REVERSE → APPLY
        # ===============================
        if purchase.stock_applied:
            _apply_lines(db, purchase, old_lines, sign=-1)
            changes += [(line.ingredient_id, -Decimal(str(line.quantity))) for line in old_lines]

        # 1️⃣ Drop old lines
        for line in old_lines:
            purchase.items.remove(line)
        db.flush()

        # 2️⃣ Header fields
        purchase.supplier_id = update_data.supplier_id
        purchase.purchase_date = update_data.purchase_date
        purchase.notes = update_data.notes

        # 3️⃣ New lines
        for line in new_lines:
            purchase.items.append(line)
        db.flush()

        if purchase.stock_applied:
            _apply_lines(db, purchase, new_lines, sign=1)
            changes += [(line.ingredient_id, Decimal(str(line.quantity))) for line in new_lines]
            ledger.ensure_non_negative(db, ledger.net_deltas(*changes))

        purchase.total_amount = _total(new_lines)

    db.refresh(purchase)
    logger.info(f"Purchase {purchase.id} updated: {len(new_lines)} line(s), total {purchase.total_amount}")
    return purchase


def approve_purchase(db: Session, purchase_id: int, approver_id: int):
    purchase = _load_purchase(db, purchase_id)
    if purchase.status != PENDING:
        raise InvalidStatusError("Purchase", purchase_id, purchase.status, "approve")
    require_staff(db, approver_id)

    with atomic(db):
        purchase.status = APPROVED
        purchase.approved_by = approver_id
        purchase.approved_at = local_now().replace(tzinfo=None)

        if not purchase.stock_applied:
            _apply_lines(db, purchase, purchase.items, sign=1)
            purchase.stock_applied = True

    db.refresh(purchase)
    logger.info(f"Purchase {purchase.id} approved by staff {approver_id}")
    return purchase


def delete_purchase(db: Session, purchase_id: int):
    purchase = _load_purchase(db, purchase_id)

    with atomic(db):
        lines = list(purchase.items)

        # Revert inventory before the lines disappear
        if purchase.stock_applied:
            _apply_lines(db, purchase, lines, sign=-1)
            ledger.ensure_non_negative(
                db,
                ledger.net_deltas(*[(line.ingredient_id, -Decimal(str(line.quantity))) for line in lines]),
            )

        for line in lines:
            db.delete(line)
        db.delete(purchase)

    logger.info(f"Purchase {purchase_id} deleted, {len(lines)} line(s) reversed")
    return True
