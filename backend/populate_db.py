from database import SessionLocal, init_db
from models.users import User
from models.product import HomeAppliance, ApplianceItem
from utils.hashing import get_password_hash

# Demo accounts (username, password, role)
DEMO_USERS = [
    ("admin", "admin123", "Admin"),
    ("customer", "customer123", "Customer"),
]

# Demo catalog: (sku, description, category, price, [(brand, model, warranty_years), ...])
DEMO_CATALOG = [
    ("WM-8KG", "Washing machine 8kg", "Laundry", 450, [("Bosch", "Serie 6", 2), ("Samsung", "EcoBubble", 3)]),
    ("FR-300", "Fridge freezer 300L", "Kitchen", 600, [("LG", "GBB72", 2), ("Beko", "CFG3582", 1)]),
    ("DW-12", "Dishwasher 12 place", "Kitchen", 350, [("Miele", "G5000", 5)]),
    ("MW-25", "Microwave 25L", "Kitchen", 120, [("Panasonic", "NN-ST45", 1)]),
    ("TD-9KG", "Tumble dryer 9kg", "Laundry", 400, [("Hotpoint", "H3D91", 2)]),
]


def populate():
    """Creates tables and inserts demo users and catalog if they are missing."""
    init_db()
    session = SessionLocal()
    try:
        for username, password, role in DEMO_USERS:
            if session.query(User).filter(User.username == username).first():
                continue
            session.add(User(username=username, password_hash=get_password_hash(password), role=role))
            print(f"Dodano użytkownika {username} ({role})")

        for sku, description, category, price, variants in DEMO_CATALOG:
            if session.query(HomeAppliance).filter(HomeAppliance.sku == sku).first():
                continue
            appliance = HomeAppliance(sku=sku, description=description, category=category, price=price)
            appliance.items = [
                ApplianceItem(brand=brand, model=model, warranty_years=years)
                for brand, model, years in variants
            ]
            session.add(appliance)
            print(f"Dodano produkt {sku} z {len(variants)} wariantami")

        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    populate()
