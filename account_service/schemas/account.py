from typing import Any
from pydantic import BaseModel
from account_service.models.user import UserRole

class AccountRead(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True

# Request bodies of the users collection. Presence is checked, format is not.
class AccountCreate(BaseModel):
    username: str
    password: str
    email: str
    # Any JSON value; UserRole.from_type maps whatever is not a known role string to normal
    type: Any = None

class AccountDelete(BaseModel):
    email: str

class PasswordUpdate(BaseModel):
    email: str
    password: str
