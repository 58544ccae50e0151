"""Shipping route table management — commands, handler and read helpers."""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from easyorder.domain import easyorder
from easyorder.shipping.route import ShippingRoute
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)

_EPOCH = datetime.fromtimestamp(0, UTC)


@easyorder.command(part_of="ShippingRoute")
class AddShippingRoute:
    name = String(max_length=255)
    percentage = Float()
    route_id = Identifier()


@easyorder.command(part_of="ShippingRoute")
class UpdateShippingRoute:
    route_id = Identifier(required=True)
    name = String(max_length=255)
    percentage = Float()


@easyorder.command(part_of="ShippingRoute")
class RemoveShippingRoute:
    route_id = Identifier(required=True)


def _require_name_and_percentage(command):
    if not command.name or command.percentage is None:
        raise ValidationError({"route": ["Name and percentage are required"]})


@easyorder.command_handler(part_of=ShippingRoute)
class ManageShippingRoutesHandler:
    @handle(AddShippingRoute)
    def add_route(self, command):
        _require_name_and_percentage(command)

        route = ShippingRoute.add(
            name=command.name,
            percentage=command.percentage,
            route_id=command.route_id,
        )
        current_domain.repository_for(ShippingRoute).add(route)
        logger.info("Shipping route added", route_id=str(route.id), percentage=route.percentage)
        return str(route.id)

    @handle(UpdateShippingRoute)
    def update_route(self, command):
        _require_name_and_percentage(command)

        repo = current_domain.repository_for(ShippingRoute)
        route = repo.get(command.route_id)
        route.update(name=command.name, percentage=command.percentage)
        repo.add(route)
        logger.info("Shipping route updated", route_id=str(route.id), percentage=route.percentage)

    @handle(RemoveShippingRoute)
    def remove_route(self, command):
        repo = current_domain.repository_for(ShippingRoute)
        route = repo.get(command.route_id)
        route.mark_removed()
        repo.add(route)
        repo._dao.delete(route)
        logger.info("Shipping route removed", route_id=str(route.id))


def list_routes():
    """Route table in the order routes were added."""
    routes = current_domain.repository_for(ShippingRoute)._dao.query.all().items
    return sorted(routes, key=lambda r: r.created_at or _EPOCH)
