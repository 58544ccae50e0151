"""Product aggregate — an entry in the storefront catalogue.

Orders never point back at a Product: they copy its name, category, price and
unit into their own lines, so removing or repricing a product leaves placed
orders untouched.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, String

from easyorder.catalogue.events import ProductAdded, ProductRemoved
from easyorder.domain import easyorder

DEFAULT_CATEGORY = "General"
DEFAULT_UNIT = "un"


@easyorder.aggregate
class Product:
    name = String(required=True, max_length=255)
    category = String(max_length=100, default=DEFAULT_CATEGORY)
    price = Float(required=True, min_value=0.0)
    unit = String(max_length=20, default=DEFAULT_UNIT)
    image_url = String(max_length=500)
    created_at = DateTime()

    @classmethod
    def add(cls, name, price, category=None, unit=None, image_url=None, product_id=None):
        now = datetime.now(UTC)
        attributes = {
            "name": name,
            "price": price,
            "category": category or DEFAULT_CATEGORY,
            "unit": unit or DEFAULT_UNIT,
            "image_url": image_url,
            "created_at": now,
        }
        if product_id is not None:
            attributes["id"] = product_id

        product = cls(**attributes)
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                unit=product.unit,
                added_at=now,
            )
        )
        return product

    def mark_removed(self):
        self.raise_(
            ProductRemoved(
                product_id=str(self.id),
                removed_at=datetime.now(UTC),
            )
        )
