from typing import Any, Optional
from enum import Enum
from sqlmodel import SQLModel, Field

class UserRole(str, Enum):
    NORMAL = "normal"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def from_type(cls, value: Any) -> "UserRole":
        """
        Resolve the `type` discriminator sent by clients on account creation.
        Only the exact strings "superAdmin" and "admin" select an elevated role;
        anything else (including a missing value) is a normal user.
        """
        if value == "superAdmin":
            return cls.SUPERADMIN
        if value == "admin":
            return cls.ADMIN
        return cls.NORMAL

class AccountBase(SQLModel):
    username: str = Field(nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    role: UserRole = Field(default=UserRole.NORMAL)

class Account(AccountBase, table=True):
    __tablename__ = "account"

    id: Optional[int] = Field(default=None, primary_key=True)
    hashed_password: str = Field(nullable=False)

# Role profiles: one table per role, each row owned by exactly one account
class RoleProfileBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", ondelete="CASCADE", unique=True, index=True)

class Admin(RoleProfileBase, table=True):
    __tablename__ = "admin"

class Superadmin(RoleProfileBase, table=True):
    __tablename__ = "superadmin"

class NormalUser(RoleProfileBase, table=True):
    __tablename__ = "normaluser"

PROFILE_MODELS: dict[UserRole, type[RoleProfileBase]] = {
    UserRole.NORMAL: NormalUser,
    UserRole.ADMIN: Admin,
    UserRole.SUPERADMIN: Superadmin,
}
