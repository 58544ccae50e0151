"""Storefront session — the signed-in user and their cart.

The session only holds pointers (user id, cart id). Everything it does is a
command processed by the domain, so the user directory, the catalogue and the
order ledger stay the single source of truth.

Flow:
    1. login / register -> open an empty cart for the user
    2. change_quantity  -> ChangeCartQuantity
    3. totals           -> priced view of the cart, recomputed on every call
    4. confirm_order    -> ConfirmOrder; cart is emptied, email body kept
    5. logout           -> DiscardCart
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from easyorder.identity.authentication import authenticate, find_user
from easyorder.identity.management import DeleteUser
from easyorder.identity.registration import RegisterUser
from easyorder.ordering.cart.cart import ShoppingCart
from easyorder.ordering.cart.items import ChangeCartQuantity, CreateCart, DiscardCart
from easyorder.ordering.order.confirmation import ConfirmOrder
from easyorder.ordering.order.order import Order
from easyorder.ordering.pricing import compute_totals
from easyorder.shipping.management import list_routes
from easyorder.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


class StorefrontSession:
    """A single user's session against the storefront."""

    def __init__(self):
        self.user_id = None
        self.cart_id = None
        self.is_processing = False
        self.last_order_id = None
        self.last_email = None

    @property
    def user(self):
        return find_user(self.user_id)

    @property
    def is_authenticated(self):
        return self.user is not None

    @property
    def cart(self):
        if self.cart_id is None:
            return None
        return current_domain.repository_for(ShoppingCart).get(self.cart_id)

    # -------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------
    def login(self, identifier, password):
        user = authenticate(identifier, password)
        self._start(str(user.id))
        return user

    def register(self, **form):
        """Register a customer from the public form and sign them in."""
        user_id = current_domain.process(RegisterUser(**form), asynchronous=False)
        self._start(user_id)
        return self.user

    def logout(self):
        if self.cart_id is not None:
            current_domain.process(DiscardCart(cart_id=self.cart_id), asynchronous=False)

        logger.info("User logged out", user_id=self.user_id)
        self.user_id = None
        self.cart_id = None
        self.last_order_id = None
        self.last_email = None
        clear_context()

    def _start(self, user_id):
        if self.cart_id is not None:
            current_domain.process(DiscardCart(cart_id=self.cart_id), asynchronous=False)

        self.user_id = user_id
        self.cart_id = current_domain.process(CreateCart(user_id=user_id), asynchronous=False)
        add_context(user_id=user_id)

    def _require_user(self):
        if self.user_id is None:
            raise ValidationError({"session": ["You must be logged in"]})

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def change_quantity(self, product_id, delta):
        """Apply a signed delta to a product in the cart and return its new quantity."""
        self._require_user()
        return current_domain.process(
            ChangeCartQuantity(cart_id=self.cart_id, product_id=product_id, delta=delta),
            asynchronous=False,
        )

    def quantity_of(self, product_id):
        cart = self.cart
        return cart.quantity_of(product_id) if cart else 0

    def totals(self):
        cart = self.cart
        return compute_totals(cart.items if cart else [], self.user, list_routes())

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def confirm_order(self):
        """Place an order for the current cart.

        A second confirmation while one is still being processed is refused.
        """
        self._require_user()
        if self.is_processing:
            raise ValidationError({"order": ["An order confirmation is already in progress"]})

        self.is_processing = True
        try:
            order_id = current_domain.process(
                ConfirmOrder(cart_id=self.cart_id, user_id=self.user_id),
                asynchronous=False,
            )
        finally:
            self.is_processing = False

        order = current_domain.repository_for(Order).get(order_id)
        self.last_order_id = order_id
        self.last_email = order.confirmation_email
        return order

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def delete_user(self, user_id):
        """Delete an account on behalf of the signed-in admin; never their own."""
        self._require_user()
        if not self.user.is_admin:
            raise ValidationError({"user": ["Only administrators can delete users"]})
        current_domain.process(DeleteUser(user_id=user_id, requested_by=self.user_id), asynchronous=False)
