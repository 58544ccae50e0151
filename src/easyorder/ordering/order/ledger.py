"""Order ledger queries — listing, filtering and cockpit metrics."""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from easyorder.ordering.order.order import Order, OrderStatus
from easyorder.shared.money import to_decimal

_EPOCH = datetime.fromtimestamp(0, UTC)


def all_orders():
    return current_domain.repository_for(Order)._dao.query.all().items


def _matches_search(order, term):
    term = term.lower()
    return (
        term in str(order.id).lower()
        or term in (order.user_name or "").lower()
        or term in (order.user_email or "").lower()
    )


def list_orders(status=None, search=None, orders=None):
    """Orders, most recent first, optionally narrowed by status and a search term.

    The search term matches part of the order id, customer name or customer
    email, ignoring case.
    """
    orders = all_orders() if orders is None else list(orders)

    wanted = OrderStatus.parse(status) if status else None
    if wanted is not None:
        orders = [o for o in orders if o.status == wanted.value]
    if search:
        orders = [o for o in orders if _matches_search(o, search)]

    return sorted(orders, key=lambda o: o.created_at or _EPOCH, reverse=True)


def cockpit_metrics(orders=None):
    """Headline numbers for the admin cockpit.

    Revenue leaves cancelled orders out, but the average ticket still divides
    by every order in the ledger.
    """
    orders = all_orders() if orders is None else list(orders)

    revenue = sum(
        (to_decimal(o.total) for o in orders if o.status != OrderStatus.CANCELLED.value),
        start=to_decimal(0),
    )
    total_orders = len(orders)
    pending = sum(1 for o in orders if o.status == OrderStatus.PENDING.value)
    average_ticket = revenue / total_orders if total_orders else to_decimal(0)

    return {
        "total_revenue": float(revenue),
        "total_orders": total_orders,
        "pending_orders": pending,
        "average_ticket": float(average_ticket),
    }
