from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


# Output schema for a placed order
class OrderResponse(BaseModel):
    id: int
    user_id: int
    total_price: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrdersList(BaseModel):
    items: List[OrderResponse]
    total: int
