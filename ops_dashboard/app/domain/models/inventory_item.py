from __future__ import annotations

import datetime as dt
from typing import ClassVar

from pydantic import Field

from ops_dashboard.app.domain.models.base import EntityForm, EntityRecord


class InventoryItem(EntityRecord):
    kind: ClassVar[str] = "inventory_item"

    item_name: str | None = None
    model_num: str | None = None
    operator: str | None = None
    date: str | None = None
    quantity: int = 0
    status: str | None = None
    details: str | None = None
    created_at: str | None = None


class InventoryItemForm(EntityForm):
    item_name: str = Field(min_length=1, max_length=255)
    model_num: str = Field(min_length=1, max_length=120)
    operator: str = Field(min_length=1, max_length=255)
    date: dt.date
    quantity: int = Field(ge=0)
    status: str = Field(min_length=1, max_length=60)
    details: str | None = None
