from pydantic import BaseModel
from typing import List

# Request schema for putting one unit of an item in the basket
class BasketAddItem(BaseModel):
    item_id: int

# Response schema for a single basket line
class BasketLineOut(BaseModel):
    item_id: int
    brand: str
    model: str
    unit_price: int
    quantity: int
    line_total: int

# Response schema for the whole basket
class BasketOut(BaseModel):
    items: List[BasketLineOut]
    total: int

# Result of a successful checkout
class CheckoutOut(BaseModel):
    order_id: int
    total_price: int
