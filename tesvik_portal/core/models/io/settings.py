"""
Admin settings, menu visibility, province region and user role I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AdminSettingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    setting_key: str
    setting_value: float
    category: str
    description: Optional[str] = None
    updated_at: datetime


class MenuVisibilityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    setting_key: str
    admin: bool
    registered: bool
    anonymous: bool


class MenuVisibilityUpdate(BaseModel):
    admin: bool = True
    registered: bool = False
    anonymous: bool = False


class VisibleMenuRead(BaseModel):
    audience: str = Field(description="admin, registered or anonymous")
    items: List[str]


class ProvinceRegionRead(BaseModel):
    province: str
    region: int
    overridden: bool = Field(default=False, description="Whether an admin override is in effect")


class ProvinceRegionUpdate(BaseModel):
    regions: Dict[str, int] = Field(description="Province name to development region (1-6)")


class UserRoleRequest(BaseModel):
    user_id: str


class AdminStatusRead(BaseModel):
    user_id: Optional[str] = None
    is_admin: bool


class AdminListRead(BaseModel):
    user_ids: List[str]
