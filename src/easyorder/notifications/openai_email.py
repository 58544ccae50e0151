"""OpenAI-backed email generator — asks a chat model to write the confirmation email."""

import os

from openai import OpenAI

from easyorder.notifications.email_port import (
    API_KEY_MISSING_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    SERVICE_ERROR_MESSAGE,
    EmailGenerator,
)
from easyorder.shared.money import format_amount
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIEmailGenerator(EmailGenerator):
    """Generate confirmation emails with the OpenAI chat completions API."""

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        """Initialize the generator.

        Args:
            api_key: OpenAI API key (or use OPENAI_API_KEY env var)
            model: Chat model to use (or EASYORDER_EMAIL_MODEL, default gpt-4o-mini)
            client: Pre-built client, mainly for tests
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("EASYORDER_EMAIL_MODEL", DEFAULT_MODEL)
        self.client = client
        if self.client is None and self.api_key:
            self.client = OpenAI(api_key=self.api_key)

    def build_prompt(self, lines, username, total, shipping):
        items = "\n".join(
            f"- {line['quantity']}x {line['name']} (R$ {format_amount(line['unit_price'])})" for line in lines
        )
        return f"""You are an administrative assistant for a B2B ordering system.
Write a formal, professional order confirmation email.

Order details:
Customer: {username}
Items:
{items}

Shipping: R$ {format_amount(shipping)}
Grand total: R$ {format_amount(total)}

Instructions:
- Keep the tone professional and courteous.
- Mention that a detailed spreadsheet is attached.
- Mention that the order is being processed by the logistics team.
- Use Markdown to highlight amounts.
- Sign as "The EasyOrder Team".
- Return ONLY the email body, without any extra subject lines.
"""

    def generate(self, lines, username, total, shipping):
        if self.client is None:
            return API_KEY_MISSING_MESSAGE

        prompt = self.build_prompt(lines, username, total, shipping)
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
            content = response.choices[0].message.content if response.choices else None
        except Exception as e:
            logger.error("Email generation failed", model=self.model, error=str(e))
            return SERVICE_ERROR_MESSAGE

        return content or EMPTY_RESPONSE_MESSAGE
