"""
Admin-managed settings entity models.

- admin_settings: numeric parameters grouped by category (the incentive
  calculator reads its constants from category ``incentive_calculation``)
- menu_visibility_settings: per-audience visibility of navigation items
- province_regions: development-region overrides for provinces
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


class AdminSetting(Base, table=True):
    """Table: admin_settings"""

    __tablename__ = "admin_settings"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    setting_key: str = Field(unique=True, index=True)
    setting_value: float
    category: str = Field(index=True)
    description: Optional[str] = Field(default=None)
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field(on_update=True)


class MenuVisibilitySetting(Base, table=True):
    """Table: menu_visibility_settings"""

    __tablename__ = "menu_visibility_settings"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    setting_key: str = Field(unique=True, index=True)
    admin: bool = Field(default=True)
    registered: bool = Field(default=False)
    anonymous: bool = Field(default=False)
    updated_at: datetime = timestamp_field(on_update=True)


class ProvinceRegion(Base, table=True):
    """Table: province_regions"""

    __tablename__ = "province_regions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    province: str = Field(unique=True, index=True)
    region: int = Field(ge=1, le=6)
    updated_at: datetime = timestamp_field(on_update=True)
