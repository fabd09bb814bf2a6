"""
User role entity model.

Users themselves live in the identity provider; the portal only stores which
user ids carry which role.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, timestamp_field


class AppRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class UserRole(Base, table=True):
    """Table: user_roles"""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    role: AppRole = Field(default=AppRole.USER)
    created_at: datetime = timestamp_field()
