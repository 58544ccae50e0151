"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from easyorder.domain import easyorder


@easyorder.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    price = Float(required=True)
    unit = String()
    added_at = DateTime(required=True)


@easyorder.event(part_of="Product")
class ProductRemoved:
    """A product was removed from the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    removed_at = DateTime(required=True)
