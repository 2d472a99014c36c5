from pydantic import BaseModel
from typing import List, Optional


# Catalog entry as shown in the shop
class ApplianceItemOut(BaseModel):
    id: int
    brand: str
    model: str
    warranty_years: int
    sku: str
    description: str
    category: Optional[str] = None
    price: int


class ApplianceItemPage(BaseModel):
    items: List[ApplianceItemOut]
    total: int
    page: int
    page_size: int
