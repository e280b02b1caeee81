import pytest

from ops_dashboard.app.domain.errors import PersistenceError
from ops_dashboard.app.overview import collect_counts, render_overview


def test_counts_follow_registry_order_and_skip_missing_stores(store_factory) -> None:
    stores = {
        "inventory": store_factory([{"id": 1}]),
        "employees": store_factory([{"id": 1}, {"id": 2}]),
    }

    counts = collect_counts(stores)

    assert list(counts.items()) == [("employees", 2), ("inventory", 1)]
    assert render_overview(counts).splitlines() == ["employees  2", "inventory  1"]


def test_count_failure_propagates(store_factory) -> None:
    store = store_factory()
    store.fail_with = PersistenceError("down", code="TRANSPORT_ERROR")

    with pytest.raises(PersistenceError):
        collect_counts({"students": store})


def test_empty_overview_message() -> None:
    assert render_overview({}) == "No entities to count."
