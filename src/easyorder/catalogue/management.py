"""Catalogue management — commands, handler and read helpers.

Removing a product also drops it from every open shopping cart; the catalogue
is authoritative for what can be bought.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from easyorder.catalogue.product import Product
from easyorder.domain import easyorder
from easyorder.ordering.cart.cart import ShoppingCart
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)

_EPOCH = datetime.fromtimestamp(0, UTC)


@easyorder.command(part_of="Product")
class AddProduct:
    """Add a product to the catalogue."""

    name = String(max_length=255)
    price = Float()
    category = String(max_length=100)
    unit = String(max_length=20)
    image_url = String(max_length=500)
    product_id = Identifier()


@easyorder.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


@easyorder.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        if not command.name or command.price is None:
            raise ValidationError({"product": ["Name and price are required"]})

        product = Product.add(
            name=command.name,
            price=command.price,
            category=command.category,
            unit=command.unit,
            image_url=command.image_url,
            product_id=command.product_id,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.mark_removed()
        repo.add(product)
        repo._dao.delete(product)

        cart_repo = current_domain.repository_for(ShoppingCart)
        for cart in cart_repo._dao.query.all().items:
            if cart.quantity_of(product.id):
                cart.remove_product(product.id)
                cart_repo.add(cart)

        logger.info("Product removed", product_id=str(product.id))


def list_products():
    """Catalogue listing, most recently added first."""
    products = current_domain.repository_for(Product)._dao.query.all().items
    return sorted(products, key=lambda p: p.created_at or _EPOCH, reverse=True)


def find_product(product_id):
    """Return the product with ``product_id`` or ``None`` when the catalogue has no such entry."""
    if not product_id:
        return None
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None
