"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from easyorder.domain import easyorder


@easyorder.event(part_of="Order")
class OrderPlaced:
    """A customer confirmed their cart and a new order entered the ledger."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(required=True)
    line_count = Integer(required=True)
    subtotal = Float(required=True)
    shipping = Float(required=True)
    total = Float(required=True)
    shipping_route_name = String()
    placed_at = DateTime(required=True)


@easyorder.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to another status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
