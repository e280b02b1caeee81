from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass
class PaginationState:
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


def page_count(total: int, page_size: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def _last_index(state: PaginationState, total: int) -> int:
    return max(page_count(total, state.page_size) - 1, 0)


def next_page(state: PaginationState, total: int) -> PaginationState:
    state.page_index = min(state.page_index + 1, _last_index(state, total))
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page_index = max(0, state.page_index - 1)
    return state


def goto_page(state: PaginationState, page_index: int, total: int) -> PaginationState:
    state.page_index = min(max(0, page_index), _last_index(state, total))
    return state


def resize(state: PaginationState, page_size: int, total: int) -> PaginationState:
    if page_size <= 0:
        raise ValueError(f"page_size must be greater than 0, got {page_size}")
    state.page_size = page_size
    return goto_page(state, state.page_index, total)


def page_slice(items: Sequence[T], state: PaginationState) -> list[T]:
    start = state.page_index * state.page_size
    return list(items[start : start + state.page_size])
