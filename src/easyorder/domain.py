"""EasyOrder bounded context — catalogue, shipping routes, users, carts and orders.

A single Protean domain holds every aggregate. Its repositories are the
application state: in-memory, owned by the process, and only mutated through
command handlers.
"""

from protean.domain import Domain

from easyorder.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
easyorder = Domain(name="easyorder")
