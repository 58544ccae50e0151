"""Tests for order ledger listing, filtering and cockpit metrics."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from easyorder.ordering.order.ledger import all_orders, cockpit_metrics, list_orders
from easyorder.ordering.order.order import Order, OrderStatus
from easyorder.ordering.pricing import OrderTotals
from protean import current_domain

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _store(order_id, user_name, email, total, days_ago, status=OrderStatus.PENDING):
    order = Order.place(
        user_id=f"user-{user_name}",
        user_name=user_name,
        user_email=email,
        lines=[],
        totals=OrderTotals(subtotal=Decimal(total), total=Decimal(total)),
        order_id=order_id,
        created_at=NOW - timedelta(days=days_ago),
    )
    if status is not OrderStatus.PENDING:
        order.set_status(status)
    current_domain.repository_for(Order).add(order)
    return order


@pytest.fixture
def ledger():
    _store("1001", "Acme Ltda", "buyer@acme.com", 300.0, days_ago=3)
    _store("1002", "Globex SA", "orders@globex.com", 100.0, days_ago=1, status=OrderStatus.DELIVERED)
    _store("1003", "Acme Ltda", "buyer@acme.com", 200.0, days_ago=2, status=OrderStatus.CANCELLED)
    _store("2001", "Initech", "it@initech.com", 400.0, days_ago=0)


class TestListOrders:
    def test_most_recent_first(self, ledger):
        assert [str(o.id) for o in list_orders()] == ["2001", "1002", "1003", "1001"]

    def test_filter_by_status(self, ledger):
        assert [str(o.id) for o in list_orders(status="Pending")] == ["2001", "1001"]

    def test_filter_by_status_name(self, ledger):
        assert [str(o.id) for o in list_orders(status="CANCELLED")] == ["1003"]

    def test_search_by_name_ignores_case(self, ledger):
        assert [str(o.id) for o in list_orders(search="acme")] == ["1003", "1001"]

    def test_search_by_email(self, ledger):
        assert [str(o.id) for o in list_orders(search="globex.com")] == ["1002"]

    def test_search_by_id_fragment(self, ledger):
        assert [str(o.id) for o in list_orders(search="200")] == ["2001"]

    def test_status_and_search_combined(self, ledger):
        assert [str(o.id) for o in list_orders(status="Pending", search="acme")] == ["1001"]

    def test_no_match(self, ledger):
        assert list_orders(search="nobody") == []

    def test_all_orders(self, ledger):
        assert len(all_orders()) == 4


class TestCockpitMetrics:
    def test_metrics(self, ledger):
        metrics = cockpit_metrics()
        assert metrics["total_orders"] == 4
        assert metrics["pending_orders"] == 2
        assert metrics["total_revenue"] == 800.0
        # Cancelled orders leave revenue but still count toward the average
        assert metrics["average_ticket"] == 200.0

    def test_empty_ledger(self):
        assert cockpit_metrics() == {
            "total_revenue": 0.0,
            "total_orders": 0,
            "pending_orders": 0,
            "average_ticket": 0.0,
        }

    def test_explicit_orders(self, ledger):
        pending = list_orders(status="Pending")
        assert cockpit_metrics(pending)["total_revenue"] == 700.0
