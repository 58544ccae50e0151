"""Domain events for the ShippingRoute aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from easyorder.domain import easyorder


@easyorder.event(part_of="ShippingRoute")
class ShippingRouteAdded:
    """A shipping region was added to the route table."""

    __version__ = 1

    route_id = Identifier(required=True)
    name = String(required=True)
    percentage = Float(required=True)
    added_at = DateTime(required=True)


@easyorder.event(part_of="ShippingRoute")
class ShippingRouteUpdated:
    """A shipping region was renamed or its percentage changed."""

    __version__ = 1

    route_id = Identifier(required=True)
    name = String(required=True)
    previous_percentage = Float()
    percentage = Float(required=True)
    updated_at = DateTime(required=True)


@easyorder.event(part_of="ShippingRoute")
class ShippingRouteRemoved:
    """A shipping region was removed from the route table."""

    __version__ = 1

    route_id = Identifier(required=True)
    removed_at = DateTime(required=True)
