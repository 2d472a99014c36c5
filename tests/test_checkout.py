import threading
import time

import pytest

from models.order import Order
from utils.basket import CatalogItemRef
from utils.checkout import (
    EmptyBasketError,
    OrderSubmissionError,
    checkout,
    db_order_submitter,
)
from utils.sessions import SessionStore

WASHER = CatalogItemRef(id=10, unit_price=450, brand="Bosch", model="Serie 6")
FRIDGE = CatalogItemRef(id=20, unit_price=600, brand="LG", model="GBB72")
KETTLE = CatalogItemRef(id=30, unit_price=30, brand="Russell Hobbs", model="Inspire")


class RecordingSubmitter:
    def __init__(self, order_id=42, error=None):
        self.order_id = order_id
        self.error = error
        self.calls = []

    def __call__(self, user_id, total_price):
        self.calls.append((user_id, total_price))
        if self.error:
            raise self.error
        return self.order_id


@pytest.fixture()
def session():
    store = SessionStore()
    token = store.create_session(7, "alice", "Customer")
    return store.get_session(token)


def _fill(basket):
    # 2 x 450 + 600 = 1500
    basket.add_item(WASHER)
    basket.add_item(WASHER)
    basket.add_item(FRIDGE)


class TestCheckout:
    def test_success_clears_basket_and_reports_order_id(self, session):
        _fill(session.basket)
        submit = RecordingSubmitter(order_id=42)

        result = checkout(session, submit)

        assert result.success
        assert result.order_id == 42
        assert result.total_price == 1500
        assert submit.calls == [(7, 1500)]
        assert session.basket.is_empty()

    def test_failed_submission_keeps_basket(self, session):
        _fill(session.basket)
        before = session.basket.get_lines()
        submit = RecordingSubmitter(error=OrderSubmissionError("database is locked"))

        result = checkout(session, submit)

        assert not result.success
        assert result.order_id is None
        assert "database is locked" in result.error
        assert session.basket.get_lines() == before
        assert session.basket.get_total_price() == 1500

    def test_submitter_without_order_id_counts_as_failure(self, session):
        _fill(session.basket)

        result = checkout(session, RecordingSubmitter(order_id=None))

        assert not result.success
        assert session.basket.get_total_price() == 1500

    def test_retry_after_failure_succeeds(self, session):
        _fill(session.basket)
        checkout(session, RecordingSubmitter(error=OrderSubmissionError("down")))

        result = checkout(session, RecordingSubmitter(order_id=3))

        assert result.success
        assert result.total_price == 1500
        assert session.basket.is_empty()

    def test_empty_basket_places_zero_order(self, session):
        submit = RecordingSubmitter(order_id=1)

        result = checkout(session, submit)

        assert result.success
        assert submit.calls == [(7, 0)]

    def test_empty_basket_rejected_when_disabled(self, session):
        submit = RecordingSubmitter()

        with pytest.raises(EmptyBasketError):
            checkout(session, submit, allow_empty=False)
        assert submit.calls == []

    def test_other_errors_propagate_and_keep_basket(self, session):
        _fill(session.basket)

        with pytest.raises(RuntimeError):
            checkout(session, RecordingSubmitter(error=RuntimeError("bug")))
        assert session.basket.get_total_price() == 1500


class TestCheckoutConcurrency:
    def test_add_during_checkout_waits_and_survives(self, session):
        _fill(session.basket)
        entered = threading.Event()
        release = threading.Event()
        totals = []

        def slow_submit(user_id, total_price):
            totals.append(total_price)
            entered.set()
            release.wait(timeout=5)
            return 99

        results = []
        checkout_thread = threading.Thread(target=lambda: results.append(checkout(session, slow_submit)))
        adder_thread = threading.Thread(target=lambda: session.basket.add_item(KETTLE))

        checkout_thread.start()
        assert entered.wait(timeout=5)
        adder_thread.start()
        time.sleep(0.1)
        # the add is blocked behind the running checkout
        assert adder_thread.is_alive()

        release.set()
        checkout_thread.join(timeout=5)
        adder_thread.join(timeout=5)

        assert results[0].success
        assert totals == [1500]
        assert session.basket.quantity_of(KETTLE.id) == 1
        assert session.basket.get_total_price() == KETTLE.unit_price

    def test_adds_racing_checkouts_are_never_lost(self, session):
        placed = []
        placed_lock = threading.Lock()

        def submit(user_id, total_price):
            with placed_lock:
                placed.append(total_price)
                return len(placed)

        def adder():
            for _ in range(200):
                session.basket.add_item(KETTLE)

        def buyer():
            for _ in range(20):
                checkout(session, submit)

        threads = [threading.Thread(target=adder) for _ in range(3)]
        threads += [threading.Thread(target=buyer) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # everything added was either ordered exactly once or is still in the basket
        assert sum(placed) + session.basket.get_total_price() == 3 * 200 * KETTLE.unit_price


class TestDbOrderSubmitter:
    def test_persists_order(self, db, users):
        submit = db_order_submitter(db)

        order_id = submit(users["alice"], 1500)

        order = db.query(Order).filter(Order.id == order_id).one()
        assert order.user_id == users["alice"]
        assert order.total_price == 1500
        assert order.created_at is not None

    def test_order_id_survives_failing_refresh(self, db, users, monkeypatch):
        def broken_refresh(*args, **kwargs):
            raise RuntimeError("refresh must not be needed")

        monkeypatch.setattr(db, "refresh", broken_refresh)
        submit = db_order_submitter(db)

        order_id = submit(users["alice"], 450)

        assert order_id is not None
        assert db.query(Order).filter(Order.id == order_id).one().total_price == 450

    def test_storage_error_becomes_submission_error(self, db, users):
        submit = db_order_submitter(db)

        # negative totals violate the table constraint
        with pytest.raises(OrderSubmissionError):
            submit(users["alice"], -1)

        # the session was rolled back and is usable again
        assert submit(users["alice"], 10) is not None
        assert db.query(Order).count() == 1
