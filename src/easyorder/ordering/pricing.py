"""Order pricing — subtotal, regional shipping and total for a cart.

Shipping is a percentage of the subtotal, taken from the shipping route the
user is assigned to. A user without a region, or whose region no longer
exists in the route table, pays no shipping and is shown the
``UNDEFINED_REGION`` label.

Totals are derived state: they are recomputed from the cart, the user and the
route table whenever they are needed and are only frozen when an order is
placed. Amounts stay exact ``Decimal`` values, so ``total`` is always exactly
``subtotal + shipping``; rounding belongs to whoever renders them.
"""

from dataclasses import dataclass
from decimal import Decimal

from easyorder.ordering.cart.cart import ShoppingCart
from easyorder.shared.money import HUNDRED, to_decimal

UNDEFINED_REGION = "Undefined Region"

_ZERO = Decimal("0")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal = _ZERO
    shipping_percentage: Decimal = _ZERO
    route_name: str = UNDEFINED_REGION
    shipping: Decimal = _ZERO
    total: Decimal = _ZERO
    items_count: int = 0


def _line_value(line, name):
    if isinstance(line, dict):
        return line[name]
    return getattr(line, name)


def resolve_route(user, routes):
    """Return ``(percentage, route_name)`` for the user's region."""
    region_id = getattr(user, "region_id", None) if user is not None else None
    if region_id:
        route = next((r for r in routes if str(r.id) == str(region_id)), None)
        if route is not None:
            return to_decimal(route.percentage), route.name
    return _ZERO, UNDEFINED_REGION


def compute_totals(lines, user, routes) -> OrderTotals:
    """Price a set of cart lines for ``user`` against the current route table.

    ``lines`` may be a ``ShoppingCart``, its ``items``, or the plain dicts
    returned by ``ShoppingCart.snapshot_lines()``.
    """
    lines = list(lines.items if isinstance(lines, ShoppingCart) else lines)

    subtotal = sum(
        (to_decimal(_line_value(line, "unit_price")) * _line_value(line, "quantity") for line in lines),
        start=_ZERO,
    )
    items_count = sum(int(_line_value(line, "quantity")) for line in lines)

    percentage, route_name = resolve_route(user, routes)
    shipping = subtotal * percentage / HUNDRED

    return OrderTotals(
        subtotal=subtotal,
        shipping_percentage=percentage,
        route_name=route_name,
        shipping=shipping,
        total=subtotal + shipping,
        items_count=items_count,
    )
