from pydantic import BaseModel, Field
from typing import Literal

# Schema for login credentials
class UserLogin(BaseModel):
    username: str
    password: str

# Schema for self-service registration (customers only)
class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    # bcrypt only looks at the first 72 bytes
    password: str = Field(min_length=6, max_length=72)

# Output schema for a stored user
class UserResponse(BaseModel):
    id: int
    username: str
    role: str

    class Config:
        from_attributes = True

# Details of the current login session
class SessionInfo(BaseModel):
    user_id: int
    username: str
    role: Literal["Admin", "Customer"]
    redirect: str
