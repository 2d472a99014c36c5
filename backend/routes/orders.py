# backend/routes/orders.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from models.order import Order
from schemas.order import OrderResponse, OrdersList
from utils.session_auth import get_current_session
from utils.sessions import Role, UserSession

router = APIRouter(prefix="/orders", tags=["Orders"])


# Orders of the logged-in user, newest first
@router.get("", response_model=OrdersList)
def my_orders(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    orders = (
        db.query(Order)
        .filter(Order.user_id == session.user_id)
        .order_by(Order.id.desc())
        .all()
    )
    return OrdersList(items=[OrderResponse.model_validate(o) for o in orders], total=len(orders))


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    order = db.query(Order).filter(Order.id == order_id).first()
    # Customers only see their own orders; a foreign id looks the same as a missing one
    if not order or (session.role != Role.ADMIN and order.user_id != session.user_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return order
