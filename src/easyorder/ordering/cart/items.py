"""Cart commands and handler — opening, changing and discarding carts."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from easyorder.catalogue.management import find_product
from easyorder.domain import easyorder
from easyorder.ordering.cart.cart import ShoppingCart


@easyorder.command(part_of="ShoppingCart")
class CreateCart:
    """Open an empty cart for a signed-in user."""

    user_id = Identifier()


@easyorder.command(part_of="ShoppingCart")
class ChangeCartQuantity:
    """Add (positive delta) or take away (negative delta) units of a product."""

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    delta = Integer(required=True)


@easyorder.command(part_of="ShoppingCart")
class DiscardCart:
    """Throw a cart away, e.g. on logout."""

    cart_id = Identifier(required=True)


@easyorder.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(user_id=command.user_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(ChangeCartQuantity)
    def change_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.apply_delta(
            product_id=command.product_id,
            delta=command.delta,
            product=find_product(command.product_id),
        )
        repo.add(cart)
        return cart.quantity_of(command.product_id)

    @handle(DiscardCart)
    def discard_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
        repo._dao.delete(cart)
