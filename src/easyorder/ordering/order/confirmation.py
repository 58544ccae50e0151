"""Order confirmation — command and handler.

Turns the user's cart into an order. The confirmation email is generated
before the order is stored, but a failing generator never stops the order:
the failure is logged and a fallback body is kept instead.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from easyorder.domain import easyorder
from easyorder.identity.authentication import find_user
from easyorder.notifications import get_email_generator
from easyorder.notifications.email_port import SERVICE_ERROR_MESSAGE
from easyorder.ordering.cart.cart import ShoppingCart
from easyorder.ordering.order.order import Order
from easyorder.ordering.pricing import compute_totals
from easyorder.shipping.management import list_routes
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)


@easyorder.command(part_of="Order")
class ConfirmOrder:
    """Place an order for everything in the cart."""

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)


def generate_confirmation_email(lines, user, totals, generator=None):
    """Ask the email generator for a confirmation body; never raises."""
    try:
        generator = generator or get_email_generator()
        return generator.generate(lines, user.username, totals.total, totals.shipping)
    except Exception as e:
        logger.error(
            "Confirmation email generation failed",
            user_id=str(user.id),
            error=str(e),
        )
        return SERVICE_ERROR_MESSAGE


@easyorder.command_handler(part_of=Order)
class ConfirmOrderHandler:
    @handle(ConfirmOrder)
    def confirm_order(self, command):
        user = find_user(command.user_id)
        if user is None:
            raise ValidationError({"user_id": ["A signed-in user is required to place an order"]})

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(command.cart_id)
        if cart.user_id and str(cart.user_id) != str(user.id):
            logger.warning("Refused confirmation of another user's cart", cart_id=str(cart.id), user_id=str(user.id))
            raise ValidationError({"cart_id": ["The cart belongs to another user"]})

        lines = cart.snapshot_lines()
        if not lines:
            logger.warning("Placing an order from an empty cart", cart_id=str(cart.id), user_id=str(user.id))

        totals = compute_totals(lines, user, list_routes())
        email_body = generate_confirmation_email(lines, user, totals)

        order = Order.place(
            user_id=str(user.id),
            user_name=user.username,
            user_email=user.email,
            lines=lines,
            totals=totals,
            confirmation_email=email_body,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(user.id),
            total=str(order.total),
            route=order.shipping_route_name,
        )
        return str(order.id)
