# backend/utils/catalog.py
from typing import Optional
from sqlalchemy.orm import Session

from models.product import ApplianceItem
from utils.basket import CatalogItemRef


# Snapshot of an appliance item as a basket entry; price comes from the base appliance
def to_catalog_ref(item: ApplianceItem) -> CatalogItemRef:
    appliance = item.home_appliance
    return CatalogItemRef(
        id=item.id,
        unit_price=appliance.price,
        brand=item.brand,
        model=item.model,
        warranty_years=item.warranty_years,
        description=appliance.description,
    )


def find_catalog_item(db: Session, item_id: int) -> Optional[CatalogItemRef]:
    item = db.query(ApplianceItem).filter(ApplianceItem.id == item_id).first()
    if item is None or item.home_appliance is None:
        return None
    return to_catalog_ref(item)
