"""ShippingRoute aggregate — a named region with a percentage surcharge on the order subtotal.

Users point at a route by id. Orders keep only the route *name* captured at
placement time, so editing or removing a route never rewrites history.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, String

from easyorder.domain import easyorder
from easyorder.shipping.events import (
    ShippingRouteAdded,
    ShippingRouteRemoved,
    ShippingRouteUpdated,
)


@easyorder.aggregate
class ShippingRoute:
    name = String(required=True, max_length=255)
    percentage = Float(required=True, min_value=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, name, percentage, route_id=None):
        now = datetime.now(UTC)
        attributes = {"name": name, "percentage": percentage, "created_at": now, "updated_at": now}
        if route_id is not None:
            attributes["id"] = route_id

        route = cls(**attributes)
        route.raise_(
            ShippingRouteAdded(
                route_id=str(route.id),
                name=route.name,
                percentage=route.percentage,
                added_at=now,
            )
        )
        return route

    def update(self, name, percentage):
        previous_percentage = self.percentage
        self.name = name
        self.percentage = percentage
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ShippingRouteUpdated(
                route_id=str(self.id),
                name=self.name,
                previous_percentage=previous_percentage,
                percentage=self.percentage,
                updated_at=now,
            )
        )

    def mark_removed(self):
        self.raise_(
            ShippingRouteRemoved(
                route_id=str(self.id),
                removed_at=datetime.now(UTC),
            )
        )
