"""Fake email generator — renders a plain template and records requests for testing."""

from easyorder.notifications.email_port import EmailGenerator
from easyorder.shared.money import format_currency


class FakeEmailGenerator(EmailGenerator):
    """Email generator that answers from a local template."""

    def __init__(self):
        self.requests: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email generation failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email generation failed"):
        """Configure the fake generator behavior for testing.

        A failing fake raises ``RuntimeError``, standing in for an adapter that
        breaks its contract.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def generate(self, lines, username, total, shipping):
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)

        self.requests.append({"lines": lines, "username": username, "total": total, "shipping": shipping})

        items = "\n".join(
            f"- {line['quantity']}x {line['name']} ({format_currency(line['unit_price'])})" for line in lines
        )
        return (
            f"Dear {username},\n\n"
            "We confirm receipt of your order:\n"
            f"{items}\n\n"
            f"Shipping: **{format_currency(shipping)}**\n"
            f"Grand total: **{format_currency(total)}**\n\n"
            "A detailed spreadsheet is attached. Your order is now with our logistics team.\n\n"
            "The EasyOrder Team"
        )

    def reset(self):
        """Clear recorded requests (useful between tests)."""
        self.requests.clear()
        self.should_succeed = True
        self.failure_reason = "Email generation failed"
