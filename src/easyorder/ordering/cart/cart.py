"""Shopping Cart aggregate — the active session's selection of products.

Each line copies the product's catalogue fields next to its quantity. A
quantity is always at least 1: decrementing a line to zero removes it.

Changes are driven by a signed delta (the storefront's plus/minus buttons):

    * unknown product            -> ignored
    * no line yet, delta > 0     -> new line with quantity 1, whatever the delta
    * no line yet, delta <= 0    -> ignored
    * existing line              -> quantity + delta, removed when that is <= 0

None of the cart operations raise; input that makes no sense is a no-op.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from easyorder.domain import easyorder
from easyorder.ordering.cart.events import (
    CartCleared,
    CartLineAdded,
    CartLineQuantityChanged,
    CartLineRemoved,
)


@easyorder.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    unit_price = Float(required=True, min_value=0.0)
    unit = String(max_length=20)
    quantity = Integer(required=True, min_value=1)


@easyorder.aggregate
class ShoppingCart:
    user_id = Identifier()
    items = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id=None):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    def _line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def quantity_of(self, product_id):
        line = self._line_for(product_id)
        return line.quantity if line else 0

    @property
    def items_count(self):
        return sum(line.quantity for line in self.items)

    @property
    def is_empty(self):
        return not self.items

    def apply_delta(self, product_id, delta, product):
        """Apply a signed quantity change for ``product_id``.

        ``product`` is the catalogue entry for ``product_id``, or ``None`` when
        the catalogue does not know it.
        """
        if product is None or not delta:
            return

        existing = self._line_for(product_id)
        now = datetime.now(UTC)

        if existing is None:
            if delta <= 0:
                return
            self.add_items(
                CartLine(
                    product_id=str(product.id),
                    name=product.name,
                    category=product.category,
                    unit_price=product.price,
                    unit=product.unit,
                    quantity=1,
                )
            )
            self.updated_at = now
            self.raise_(CartLineAdded(cart_id=str(self.id), product_id=str(product.id), quantity=1))
            return

        previous_quantity = existing.quantity
        new_quantity = previous_quantity + delta
        if new_quantity <= 0:
            self.remove_items(existing)
            self.updated_at = now
            self.raise_(CartLineRemoved(cart_id=str(self.id), product_id=str(product_id)))
            return

        existing.quantity = new_quantity
        self.updated_at = now
        self.raise_(
            CartLineQuantityChanged(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_product(self, product_id):
        """Drop the line for a product withdrawn from the catalogue."""
        line = self._line_for(product_id)
        if line is None:
            return

        self.remove_items(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartLineRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def snapshot_lines(self):
        """Plain copies of the lines, for pricing, email prompts and order placement."""
        return [
            {
                "product_id": str(line.product_id),
                "name": line.name,
                "category": line.category,
                "unit_price": line.unit_price,
                "unit": line.unit,
                "quantity": line.quantity,
            }
            for line in self.items
        ]

    def clear(self):
        if not self.items:
            return

        lines_cleared = len(self.items)
        for line in list(self.items):
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), lines_cleared=lines_cleared))
