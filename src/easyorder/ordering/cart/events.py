"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer

from easyorder.domain import easyorder


@easyorder.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product entered the cart with quantity 1."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@easyorder.event(part_of="ShoppingCart")
class CartLineQuantityChanged:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@easyorder.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A line left the cart, either decremented to zero or because its product was withdrawn."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@easyorder.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were dropped, typically after the cart became an order."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_cleared = Integer(required=True)
