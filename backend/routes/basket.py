# backend/routes/basket.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from config import settings
from database import get_db
from utils.audit import write_log, client_ip
from utils.basket import Basket
from utils.catalog import find_catalog_item
from utils.checkout import EmptyBasketError, checkout, db_order_submitter
from utils.session_auth import get_current_session
from utils.sessions import UserSession
from schemas.basket import BasketAddItem, BasketLineOut, BasketOut, CheckoutOut

router = APIRouter(prefix="/basket", tags=["Basket"])
logger = logging.getLogger(__name__)

def _basket_to_out(basket: Basket) -> BasketOut:
    # Take lines and total under one lock so they always agree
    with basket.lock:
        lines = basket.get_lines()
        total = basket.get_total_price()

    items_out = [
        BasketLineOut(
            item_id=line.item.id,
            brand=line.item.brand,
            model=line.item.model,
            unit_price=line.item.unit_price,
            quantity=line.quantity,
            line_total=line.line_total,
        )
        for line in sorted(lines, key=lambda l: l.item.id)
    ]
    return BasketOut(items=items_out, total=total)

# Audit write failures are logged; the request result stands
def _audit(db: Session, session: UserSession, request: Request, **entry):
    try:
        write_log(db, user_id=session.user_id, username=session.username, ip=client_ip(request), **entry)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not write %s audit entry for user %s", entry.get("action"), session.user_id)

@router.get("", response_model=BasketOut)
def get_basket(session: UserSession = Depends(get_current_session)):
    return _basket_to_out(session.basket)

@router.post("/items", response_model=BasketOut, status_code=status.HTTP_200_OK)
def add_to_basket(
    payload: BasketAddItem,
    request: Request,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    item = find_catalog_item(db, payload.item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")

    with session.basket.lock:
        session.basket.add_item(item)
        out = _basket_to_out(session.basket)
        quantity = session.basket.quantity_of(item.id)

    _audit(db, session, request, action="BASKET_ADD", resource="basket",
           meta={"item_id": item.id, "quantity": quantity, "total": out.total})
    return out

@router.delete("/items/{item_id}", response_model=BasketOut)
def remove_from_basket(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    # Removing something that is not there (double submit) is not an error
    with session.basket.lock:
        removed = session.basket.remove_item(item_id)
        out = _basket_to_out(session.basket)

    _audit(db, session, request, action="BASKET_REMOVE", resource="basket",
           meta={"item_id": item_id, "removed": removed, "total": out.total})
    return out

@router.delete("", response_model=BasketOut)
def empty_basket(session: UserSession = Depends(get_current_session)):
    session.basket.clear()
    return _basket_to_out(session.basket)

@router.post("/checkout", response_model=CheckoutOut)
def checkout_basket(
    request: Request,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    try:
        result = checkout(session, db_order_submitter(db), allow_empty=settings.ALLOW_EMPTY_CHECKOUT)
    except EmptyBasketError:
        raise HTTPException(status_code=400, detail="Basket is empty")

    _audit(db, session, request, action="CHECKOUT", resource="order",
           status="SUCCESS" if result.success else "FAIL",
           meta={"order_id": result.order_id, "total": result.total_price})

    if not result.success:
        # Basket was left as it was, the client can simply try again
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Checkout failed, your basket was kept. Please try again.",
        )
    return CheckoutOut(order_id=result.order_id, total_price=result.total_price)
