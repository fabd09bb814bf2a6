"""
Common base of the table entities.

Every entity module imports ``Base`` so that all tables register on the one
``SQLModel.metadata`` used by ``create_all`` and the Alembic migrations.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from tesvik_portal.core.text import utc_now


class Base(SQLModel):
    """Base class for the portal's table entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def timestamp_field(*, index: bool = False, on_update: bool = False, nullable: bool = False) -> Any:
    """Timezone-aware UTC timestamp column.

    Filled with the current time on insert, and on every update when
    ``on_update`` is set. A ``nullable`` column starts empty.
    """
    column_kwargs = {"onupdate": utc_now} if on_update else {}
    if nullable:
        return Field(default=None, index=index, sa_type=DateTime(timezone=True), sa_column_kwargs=column_kwargs)
    return Field(
        default_factory=utc_now, index=index, sa_type=DateTime(timezone=True), sa_column_kwargs=column_kwargs
    )
