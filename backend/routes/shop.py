from typing import Optional, Literal
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database import get_db
from models.product import ApplianceItem, HomeAppliance
from schemas.product import ApplianceItemOut, ApplianceItemPage

router = APIRouter(
    prefix="/shop",
    tags=["Shop"]
)


def _item_to_out(item: ApplianceItem) -> ApplianceItemOut:
    appliance = item.home_appliance
    return ApplianceItemOut(
        id=item.id,
        brand=item.brand,
        model=item.model,
        warranty_years=item.warranty_years,
        sku=appliance.sku,
        description=appliance.description,
        category=appliance.category,
        price=appliance.price,
    )


# Catalog is public, no session needed to browse
@router.get("/items", response_model=ApplianceItemPage)
def list_items(
    q: Optional[str] = Query(None, description="Search brand, model, description or category"),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: Literal["id", "price", "warranty_years", "brand"] = "id",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
):
    query = db.query(ApplianceItem).join(HomeAppliance)

    if q:
        like = f"%{q}%"
        query = query.filter(
            or_(
                ApplianceItem.brand.ilike(like),
                ApplianceItem.model.ilike(like),
                HomeAppliance.description.ilike(like),
                HomeAppliance.category.ilike(like),
            )
        )

    if category:
        query = query.filter(HomeAppliance.category.ilike(category))

    allowed = {
        "id": ApplianceItem.id,
        "price": HomeAppliance.price,
        "warranty_years": ApplianceItem.warranty_years,
        "brand": ApplianceItem.brand,
    }
    sort_col = allowed[sort_by]
    query = query.order_by(sort_col.desc() if order == "desc" else sort_col.asc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return ApplianceItemPage(
        items=[_item_to_out(it) for it in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/items/{item_id}", response_model=ApplianceItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    item = db.query(ApplianceItem).filter(ApplianceItem.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return _item_to_out(item)
