"""Email generator port — abstract interface for confirmation email bodies."""

from abc import ABC, abstractmethod

API_KEY_MISSING_MESSAGE = "API key not configured. The confirmation email could not be generated automatically."
EMPTY_RESPONSE_MESSAGE = "Error generating email."
SERVICE_ERROR_MESSAGE = "An error occurred while contacting the AI assistant to generate the email."


class EmailGenerator(ABC):
    """Produces the body of an order confirmation email.

    Implementations must never raise: every failure is turned into a
    display-safe explanatory string.
    """

    @abstractmethod
    def generate(self, lines: list[dict], username: str, total: float, shipping: float) -> str:
        """Return the email body for an order.

        Args:
            lines: Cart line dicts with name, unit_price and quantity.
            username: Company name of the customer.
            total: Order total including shipping.
            shipping: Shipping amount.
        """
        ...
