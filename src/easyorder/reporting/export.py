"""CSV export of the order ledger.

One row per order line: an order with three lines becomes three rows, each
repeating the order's totals. Customer columns come from the user directory
as it is now, falling back to the name and email captured on the order when
the account no longer exists.

Every field is quoted (embedded quotes doubled), amounts carry exactly two
decimals, and the text starts with a UTF-8 byte-order mark so spreadsheet
tools pick the right encoding.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass

from easyorder.identity.user import User
from easyorder.ordering.order.order import Order
from easyorder.shared.money import format_amount, to_decimal

BOM = "\ufeff"

ORDER_EXPORT_HEADERS = [
    "Order ID",
    "Date",
    "Time",
    "Status",
    "Customer ID",
    "Customer Name",
    "Customer Email",
    "CNPJ",
    "Address",
    "City",
    "State",
    "CEP",
    "Product ID",
    "Product Name",
    "Category",
    "Unit",
    "Quantity",
    "Unit Price",
    "Item Total",
    "Order Subtotal",
    "Order Shipping",
    "Shipping Route",
    "Order Total",
]

CART_EXPORT_HEADERS = ["ID", "Product", "Category", "Quantity", "Unit Price", "Subtotal"]


@dataclass(frozen=True)
class OrderExportRecord:
    """An order paired with its customer's current directory entry (``None`` if gone)."""

    order: Order
    user: User | None = None

    @property
    def customer_name(self):
        return (self.user.username if self.user else None) or self.order.user_name

    @property
    def customer_email(self):
        return (self.user.email if self.user else None) or self.order.user_email

    def customer_field(self, name):
        return getattr(self.user, name, None) if self.user else None


def resolve_export_records(orders, users):
    """Pair each order with the user currently holding its ``user_id``."""
    directory = {str(u.id): u for u in users}
    return [OrderExportRecord(order=o, user=directory.get(str(o.user_id))) for o in orders]


def _text(value):
    return "" if value is None else str(value)


def _rows_for(record):
    order = record.order
    placed_at = order.created_at.astimezone() if order.created_at else None
    date = placed_at.strftime("%d/%m/%Y") if placed_at else ""
    time = placed_at.strftime("%H:%M:%S") if placed_at else ""

    for line in order.items:
        yield [
            order.id,
            date,
            time,
            order.status,
            order.user_id,
            record.customer_name,
            record.customer_email,
            record.customer_field("cnpj"),
            record.customer_field("address"),
            record.customer_field("city"),
            record.customer_field("state"),
            record.customer_field("cep"),
            line.product_id,
            line.name,
            line.category,
            line.unit,
            line.quantity,
            format_amount(line.unit_price),
            format_amount(to_decimal(line.unit_price) * line.quantity),
            format_amount(order.subtotal),
            format_amount(order.shipping),
            order.shipping_route_name,
            format_amount(order.total),
        ]


def _render(headers, rows):
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_text(value) for value in row])
    return buffer.getvalue().rstrip("\n")


def records_to_csv(records):
    rows = [row for record in records for row in _rows_for(record)]
    return BOM + _render(ORDER_EXPORT_HEADERS, rows)


def orders_to_csv(orders, users):
    """Export ``orders`` as CSV text, resolving customers against ``users``."""
    return records_to_csv(resolve_export_records(orders, users))


def order_to_csv(order, users):
    """Single-order export: the same layout applied to a one-order ledger."""
    return orders_to_csv([order], users)


def cart_to_csv(lines):
    """Item sheet for a cart or an order's lines (dicts or line entities)."""

    def value(line, name):
        return line[name] if isinstance(line, dict) else getattr(line, name)

    rows = [
        [
            value(line, "product_id"),
            value(line, "name"),
            value(line, "category"),
            value(line, "quantity"),
            format_amount(value(line, "unit_price")),
            format_amount(to_decimal(value(line, "unit_price")) * value(line, "quantity")),
        ]
        for line in lines
    ]
    return _render(CART_EXPORT_HEADERS, rows)

