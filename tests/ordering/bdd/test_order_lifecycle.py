"""BDD tests for the order lifecycle from cart to status administration."""

from decimal import Decimal

import pytest
from easyorder.catalogue.management import AddProduct
from easyorder.identity.management import AddUser
from easyorder.notifications.email_port import SERVICE_ERROR_MESSAGE
from easyorder.ordering.cart.cart import ShoppingCart
from easyorder.ordering.cart.items import ChangeCartQuantity, CreateCart
from easyorder.ordering.order.confirmation import ConfirmOrder
from easyorder.ordering.order.order import Order
from easyorder.ordering.order.status import UpdateOrderStatus
from easyorder.shipping.management import AddShippingRoute
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_lifecycle.feature")


@pytest.fixture
def world(fake_email_generator):
    return {"products": {}, "email": fake_email_generator}


def _change(world, name, delta):
    current_domain.process(
        ChangeCartQuantity(cart_id=world["cart_id"], product_id=world["products"][name], delta=delta),
        asynchronous=False,
    )


def _confirm(world):
    world["order_id"] = current_domain.process(
        ConfirmOrder(cart_id=world["cart_id"], user_id=world["user_id"]),
        asynchronous=False,
    )


def _order(world):
    return current_domain.repository_for(Order).get(world["order_id"])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shipping route "{name}" charging {percentage:d} percent'))
def shipping_route(world, name, percentage):
    world["route_id"] = current_domain.process(
        AddShippingRoute(name=name, percentage=percentage),
        asynchronous=False,
    )


@given(parsers.cfparse('a customer "{username}" assigned to that route'))
def customer(world, username):
    world["user_id"] = current_domain.process(
        AddUser(
            username=username,
            email="buyer@example.com",
            password="secret",
            region_id=world["route_id"],
        ),
        asynchronous=False,
    )
    world["cart_id"] = current_domain.process(CreateCart(user_id=world["user_id"]), asynchronous=False)


@given(parsers.cfparse('the catalogue has "{name}" at {price:f}'))
def catalogue_product(world, name, price):
    world["products"][name] = current_domain.process(AddProduct(name=name, price=price), asynchronous=False)


@given(parsers.re(r'the customer adds "(?P<name>[^"]+)" (?P<times>\d+) times?'))
def add_to_cart(world, name, times):
    for _ in range(int(times)):
        _change(world, name, 1)


@given("the customer confirms the order")
def given_confirmed(world):
    _confirm(world)


@given("the email generator is failing")
def failing_generator(world):
    world["email"].configure(should_succeed=False, failure_reason="service unavailable")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the customer confirms the order")
def confirm_order(world):
    _confirm(world)


@when(parsers.cfparse('the customer removes one "{name}"'))
def remove_one(world, name):
    _change(world, name, -1)


@when(parsers.cfparse('the administrator sets the order to "{status}"'))
def set_status(world, status):
    current_domain.process(
        UpdateOrderStatus(order_id=world["order_id"], status=status),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {total} with shipping {shipping}"))
def order_total(world, total, shipping):
    order = _order(world)
    assert order.total == Decimal(total)
    assert order.shipping == Decimal(shipping)


@then(parsers.cfparse('the order is "{status}"'))
def order_status(world, status):
    assert _order(world).status == status


@then("the customer's cart is empty")
def cart_is_empty(world):
    assert current_domain.repository_for(ShoppingCart).get(world["cart_id"]).is_empty


@then("the order keeps the email service error message")
def email_error_kept(world):
    assert _order(world).confirmation_email == SERVICE_ERROR_MESSAGE
