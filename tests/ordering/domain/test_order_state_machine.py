"""Tests for order status changes."""

from decimal import Decimal

import pytest
from easyorder.ordering.order.events import OrderStatusChanged
from easyorder.ordering.order.order import Order, OrderStatus
from easyorder.ordering.pricing import OrderTotals


def _order():
    order = Order.place(
        user_id="user-001",
        user_name="Acme Ltda",
        user_email="buyer@acme.com",
        lines=[],
        totals=OrderTotals(),
    )
    order._events.clear()
    return order


class TestOrderStatusParse:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (OrderStatus.SHIPPED, OrderStatus.SHIPPED),
            ("Shipped", OrderStatus.SHIPPED),
            ("SHIPPED", OrderStatus.SHIPPED),
            ("Cancelled", OrderStatus.CANCELLED),
        ],
    )
    def test_known_values(self, value, expected):
        assert OrderStatus.parse(value) is expected

    @pytest.mark.parametrize("value", ["Lost", "", None, 3, "shipped "])
    def test_unknown_values(self, value):
        assert OrderStatus.parse(value) is None


class TestSetStatus:
    def test_pending_to_shipped(self):
        order = _order()
        assert order.set_status("Shipped") is True
        assert order.status == "Shipped"

    def test_accepts_enum_member(self):
        order = _order()
        order.set_status(OrderStatus.PROCESSING)
        assert order.status == "Processing"

    def test_shipped_back_to_pending(self):
        order = _order()
        order.set_status(OrderStatus.SHIPPED)
        assert order.set_status(OrderStatus.PENDING) is True
        assert order.status == "Pending"

    @pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_nothing_is_terminal(self, terminal):
        order = _order()
        order.set_status(terminal)
        assert order.set_status(OrderStatus.PROCESSING) is True
        assert order.status == "Processing"

    @pytest.mark.parametrize("source", list(OrderStatus))
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_every_transition_is_allowed(self, source, target):
        order = _order()
        order.set_status(source)
        assert order.set_status(target) is True
        assert order.status == target.value

    def test_unknown_status_is_ignored(self):
        order = _order()
        order.set_status(OrderStatus.SHIPPED)
        order._events.clear()

        assert order.set_status("Lost in transit") is False
        assert order.status == "Shipped"
        assert order._events == []

    def test_raises_status_changed(self):
        order = _order()
        order.set_status("Delivered")
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "Pending"
        assert event.new_status == "Delivered"

    def test_updates_timestamp(self):
        order = _order()
        placed = order.updated_at
        order.set_status("Processing")
        assert order.updated_at >= placed

    def test_status_change_keeps_totals(self):
        order = Order.place(
            user_id="user-001",
            user_name="Acme Ltda",
            user_email="buyer@acme.com",
            lines=[],
            totals=OrderTotals(subtotal=Decimal("100"), shipping=Decimal("5"), total=Decimal("105")),
        )
        order.set_status("Cancelled")
        assert order.total == Decimal("105")
