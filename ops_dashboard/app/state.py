from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection

from ops_dashboard.app.ui.listing_view import SortKey
from ops_dashboard.app.ui.pagination import DEFAULT_PAGE_SIZE, PaginationState


@dataclass
class ViewState:
    """UI-only view criteria; never written back to the backend."""

    search_text: str = ""
    type_filter: frozenset[str] = frozenset()
    sort: SortKey | None = None
    pagination: PaginationState = field(default_factory=PaginationState)
    selected_ids: set[str] = field(default_factory=set)

    @classmethod
    def with_page_size(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "ViewState":
        if page_size <= 0:
            raise ValueError(f"page_size must be greater than 0, got {page_size}")
        return cls(pagination=PaginationState(page_index=0, page_size=page_size))

    @property
    def page_index(self) -> int:
        return self.pagination.page_index

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    def reset_for_reload(self, known_ids: Collection[str]) -> None:
        self.pagination.page_index = 0
        self.selected_ids.intersection_update(known_ids)
