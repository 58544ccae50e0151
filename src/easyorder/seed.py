"""Demo data — the storefront as it ships out of the box.

Six products, four shipping regions, an admin and one customer, and two
historical orders for that customer. Loading is done through the same
commands the storefront uses, except for the historical orders, which are
placed directly with back-dated timestamps.
"""

from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from easyorder.catalogue.management import AddProduct
from easyorder.identity.authentication import find_user
from easyorder.identity.management import AddUser
from easyorder.ordering.order.order import Order, OrderStatus
from easyorder.ordering.pricing import compute_totals
from easyorder.shipping.management import AddShippingRoute, list_routes
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {"product_id": "1", "name": "Dell Inspiron 15 Notebook", "category": "Electronics", "price": 3500.00},
    {"product_id": "2", "name": "Logitech Wireless Mouse", "category": "Peripherals", "price": 120.50},
    {"product_id": "3", "name": "RGB Mechanical Keyboard", "category": "Peripherals", "price": 450.00},
    {"product_id": "4", "name": 'LG 29" Ultrawide Monitor', "category": "Electronics", "price": 1200.00},
    {"product_id": "5", "name": "Ergonomic Office Chair", "category": "Furniture", "price": 850.00},
    {"product_id": "6", "name": "Noise Cancelling Headset", "category": "Audio", "price": 600.00},
]

DEMO_ROUTES = [
    {"route_id": "1", "name": "South Region (Standard)", "percentage": 5.0},
    {"route_id": "2", "name": "Southeast Region", "percentage": 7.5},
    {"route_id": "3", "name": "North/Northeast Region", "percentage": 12.0},
    {"route_id": "4", "name": "Midwest", "percentage": 9.0},
]

DEMO_USERS = [
    {
        "user_id": "1",
        "username": "admin",
        "email": "admin@easyorder.com",
        "password": "admin",
        "role": "admin",
        "city": "São Paulo",
        "state": "SP",
        "region_id": "2",
    },
    {
        "user_id": "2",
        "username": "Cliente Exemplo Ltda",
        "email": "compras@cliente.com",
        "password": "123",
        "role": "user",
        "cnpj": "12.345.678/0001-99",
        "address": "Av. Paulista, 1000",
        "city": "São Paulo",
        "state": "SP",
        "region_id": "2",
    },
]

# (order id, customer id, days ago, [(product id, quantity)], status)
DEMO_ORDERS = [
    ("1001", "2", 1, [("1", 1), ("2", 2)], OrderStatus.PENDING),
    ("1002", "2", 2, [("5", 5)], OrderStatus.DELIVERED),
]


def _line_for(product, quantity):
    return {
        "product_id": product["product_id"],
        "name": product["name"],
        "category": product["category"],
        "unit_price": product["price"],
        "unit": "un",
        "quantity": quantity,
    }


def seed_demo_data(now=None):
    """Load the demo catalogue, routes, users and orders into the current domain."""
    now = now or datetime.now(UTC)

    for route in DEMO_ROUTES:
        current_domain.process(AddShippingRoute(**route), asynchronous=False)
    for product in DEMO_PRODUCTS:
        current_domain.process(AddProduct(unit="un", **product), asynchronous=False)
    for user in DEMO_USERS:
        current_domain.process(AddUser(**user), asynchronous=False)

    products = {p["product_id"]: p for p in DEMO_PRODUCTS}
    routes = list_routes()
    repo = current_domain.repository_for(Order)
    for order_id, user_id, days_ago, wanted, status in DEMO_ORDERS:
        user = find_user(user_id)
        lines = [_line_for(products[product_id], quantity) for product_id, quantity in wanted]
        order = Order.place(
            user_id=user_id,
            user_name=user.username,
            user_email=user.email,
            lines=lines,
            totals=compute_totals(lines, user, routes),
            order_id=order_id,
            created_at=now - timedelta(days=days_ago),
        )
        if status != OrderStatus.PENDING:
            order.set_status(status)
        repo.add(order)

    logger.info(
        "Demo data loaded",
        products=len(DEMO_PRODUCTS),
        routes=len(DEMO_ROUTES),
        users=len(DEMO_USERS),
        orders=len(DEMO_ORDERS),
    )
