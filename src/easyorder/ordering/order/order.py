"""Order aggregate — a confirmed cart frozen into the ledger.

An order copies everything it needs at placement time: the cart lines, the
customer's name and email, the computed totals and the shipping route name.
Later changes to products, users or routes never alter it. Only ``status``
changes after placement.

Status machine:
    PENDING on placement. An admin may move any order to any status,
    including back out of DELIVERED or CANCELLED; nothing is terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from easyorder.domain import easyorder
from easyorder.ordering.order.events import OrderPlaced, OrderStatusChanged
from easyorder.shared.money import to_decimal
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value):
        """Resolve a member from itself, its value (``"Shipped"``) or its name (``"SHIPPED"``).

        Returns ``None`` for anything else.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for status in cls:
            if value in (status.value, status.name):
                return status
        return None


# Every status may move to every other one. Kept as a table so a tighter
# policy only has to change this mapping.
_ALLOWED_TRANSITIONS = {status: set(OrderStatus) for status in OrderStatus}


@easyorder.value_object(part_of="Order")
class OrderPricing:
    """Amounts locked at placement, held as exact decimal text."""

    subtotal = String(max_length=50, default="0")
    shipping = String(max_length=50, default="0")
    total = String(max_length=50, default="0")


@easyorder.entity(part_of="Order")
class OrderLine:
    """Snapshot of a cart line: the product as it was when the order was placed."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    unit = String(max_length=20)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@easyorder.aggregate
class Order:
    user_id = Identifier(required=True)
    user_name = String(required=True, max_length=255)
    user_email = String(max_length=254)
    items = HasMany(OrderLine)
    pricing = ValueObject(OrderPricing)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_route_name = String(max_length=255)
    confirmation_email = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        user_id,
        user_name,
        user_email,
        lines,
        totals,
        confirmation_email=None,
        order_id=None,
        created_at=None,
    ):
        """Create a PENDING order from priced cart lines.

        Args:
            user_id: The customer placing the order.
            user_name: Customer name at placement time.
            user_email: Customer email at placement time.
            lines: Dicts with product_id, name, category, unit, unit_price, quantity.
            totals: ``OrderTotals`` computed for these lines.
            confirmation_email: Body of the confirmation email, if one was generated.
            order_id: Explicit identity (seed data); generated otherwise.
            created_at: Explicit placement time (seed data); now otherwise.
        """
        now = created_at or datetime.now(UTC)
        attributes = {
            "user_id": user_id,
            "user_name": user_name,
            "user_email": user_email,
            "pricing": OrderPricing(
                subtotal=str(to_decimal(totals.subtotal)),
                shipping=str(to_decimal(totals.shipping)),
                total=str(to_decimal(totals.total)),
            ),
            "status": OrderStatus.PENDING.value,
            "shipping_route_name": totals.route_name,
            "confirmation_email": confirmation_email,
            "created_at": now,
            "updated_at": now,
        }
        if order_id is not None:
            attributes["id"] = order_id

        order = cls(**attributes)
        for line in lines:
            order.add_items(
                OrderLine(
                    product_id=line["product_id"],
                    name=line["name"],
                    category=line.get("category"),
                    unit=line.get("unit"),
                    unit_price=line["unit_price"],
                    quantity=line["quantity"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                user_name=user_name,
                line_count=len(order.items),
                subtotal=float(order.subtotal),
                shipping=float(order.shipping),
                total=float(order.total),
                shipping_route_name=order.shipping_route_name,
                placed_at=now,
            )
        )
        return order

    @property
    def subtotal(self):
        return to_decimal(self.pricing.subtotal if self.pricing else None)

    @property
    def shipping(self):
        return to_decimal(self.pricing.shipping if self.pricing else None)

    @property
    def total(self):
        return to_decimal(self.pricing.total if self.pricing else None)

    def set_status(self, new_status):
        """Move the order to ``new_status``.

        Unknown statuses are ignored. Returns whether the status was applied.
        """
        target = OrderStatus.parse(new_status)
        current = OrderStatus(self.status)
        if target is None or target not in _ALLOWED_TRANSITIONS[current]:
            logger.warning("Ignored order status change", order_id=str(self.id), requested=str(new_status))
            return False

        self.status = target.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
        return True
