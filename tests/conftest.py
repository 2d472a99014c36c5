import os
import tempfile

# Point the app at a throwaway SQLite file before any backend module is imported
_tmp_dir = tempfile.mkdtemp(prefix="appliance-store-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_tmp_dir, "test.db")

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from main import app
from models.product import ApplianceItem, HomeAppliance
from models.users import User
from utils.hashing import get_password_hash
from utils.sessions import SessionStore

CUSTOMER = ("alice", "alice-pass")
OTHER_CUSTOMER = ("bob", "bob-pass")
ADMIN = ("root", "root-pass")
PASSWORDS = dict((CUSTOMER, OTHER_CUSTOMER, ADMIN))


@pytest.fixture(autouse=True)
def fresh_state():
    """Empty tables and a new session store for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.session_store = SessionStore()
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def users(db):
    created = {}
    for (username, password), role in ((CUSTOMER, "Customer"), (OTHER_CUSTOMER, "Customer"), (ADMIN, "Admin")):
        user = User(username=username, password_hash=get_password_hash(password), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        created[username] = user.id
    return created


@pytest.fixture()
def catalog(db):
    """Washing machine (450) and fridge (600); returns item ids by short name."""
    washer = HomeAppliance(sku="WM-8KG", description="Washing machine 8kg", category="Laundry", price=450)
    washer.items = [ApplianceItem(brand="Bosch", model="Serie 6", warranty_years=2)]
    fridge = HomeAppliance(sku="FR-300", description="Fridge freezer 300L", category="Kitchen", price=600)
    fridge.items = [ApplianceItem(brand="LG", model="GBB72", warranty_years=3)]
    db.add_all([washer, fridge])
    db.commit()
    return {"washer": washer.items[0].id, "fridge": fridge.items[0].id}


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def login_as(users):
    """Log the given client in as one of the seeded users."""

    def _login(client, username):
        return client.post("/login", json={"username": username, "password": PASSWORDS[username]})

    return _login
