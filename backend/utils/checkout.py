# backend/utils/checkout.py
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.order import Order
from utils.sessions import UserSession

logger = logging.getLogger(__name__)


class OrderSubmissionError(Exception):
    """The order could not be persisted."""


class EmptyBasketError(Exception):
    """Checkout of an empty basket while zero-total orders are disabled."""


@dataclass(frozen=True)
class CheckoutResult:
    success: bool
    total_price: int
    order_id: Optional[int] = None
    error: Optional[str] = None


# (user_id, total_price) -> generated order id
OrderSubmitter = Callable[[int, int], Optional[int]]


def db_order_submitter(db: Session) -> OrderSubmitter:
    """Build a submitter that writes the order row with the given SQLAlchemy session."""

    def submit(user_id: int, total_price: int) -> int:
        order = Order(user_id=user_id, total_price=total_price)
        try:
            db.add(order)
            # Id is assigned on flush; nothing after the commit may fail the submission
            db.flush()
            order_id = order.id
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise OrderSubmissionError(f"Could not store order for user {user_id}") from exc
        return order_id

    return submit


def checkout(session: UserSession, submit_order: OrderSubmitter, allow_empty: bool = True) -> CheckoutResult:
    """
    Turn the session's basket into an order.

    The basket lock is held from reading the total until the basket is cleared,
    so adds and removes on the same basket wait for the whole sequence. The basket
    is cleared only after the submitter returned an order id.
    """
    basket = session.basket
    with basket.lock:
        total_price = basket.get_total_price()
        if not allow_empty and basket.is_empty():
            raise EmptyBasketError("Basket is empty")

        try:
            order_id = submit_order(session.user_id, total_price)
        except OrderSubmissionError as exc:
            logger.warning("Checkout failed for user %s (total %s)", session.user_id, total_price, exc_info=True)
            return CheckoutResult(success=False, total_price=total_price, error=str(exc))

        if order_id is None:
            logger.warning("Order store returned no id for user %s, basket kept", session.user_id)
            return CheckoutResult(success=False, total_price=total_price, error="Order was not recorded")

        basket.clear()

    logger.info("Order %s placed by user %s, total %s", order_id, session.user_id, total_price)
    return CheckoutResult(success=True, total_price=total_price, order_id=order_id)
