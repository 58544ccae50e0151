"""Application tests for UpdateOrderStatus."""

from decimal import Decimal

import pytest
from easyorder.ordering.order.order import Order
from easyorder.ordering.order.status import UpdateOrderStatus
from easyorder.ordering.pricing import OrderTotals
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


@pytest.fixture
def order_id():
    order = Order.place(
        user_id="user-001",
        user_name="Acme Ltda",
        user_email="buyer@acme.com",
        lines=[
            {
                "product_id": "prod-1",
                "name": "Notebook",
                "category": "Electronics",
                "unit_price": 3500.0,
                "unit": "un",
                "quantity": 1,
            }
        ],
        totals=OrderTotals(subtotal=Decimal("3500"), shipping=Decimal("175"), total=Decimal("3675"), route_name="South"),
    )
    current_domain.repository_for(Order).add(order)
    return str(order.id)


def _update(order_id, status):
    return current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


def _stored(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestUpdateOrderStatus:
    def test_status_is_persisted(self, order_id):
        assert _update(order_id, "Shipped") == "Shipped"
        assert _stored(order_id).status == "Shipped"

    def test_name_form_is_accepted(self, order_id):
        _update(order_id, "PROCESSING")
        assert _stored(order_id).status == "Processing"

    def test_pending_shipped_pending(self, order_id):
        _update(order_id, "Shipped")
        _update(order_id, "Pending")
        assert _stored(order_id).status == "Pending"

    def test_unknown_status_leaves_order(self, order_id):
        _update(order_id, "Delivered")
        assert _update(order_id, "Teleported") == "Delivered"
        assert _stored(order_id).status == "Delivered"

    def test_status_change_keeps_snapshot(self, order_id):
        _update(order_id, "Cancelled")
        order = _stored(order_id)
        assert order.total == Decimal("3675")
        assert order.items[0].name == "Notebook"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update("missing-order", "Shipped")
