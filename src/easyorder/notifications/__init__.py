"""Confirmation email generator registry.

Order confirmation asks the configured generator for an email body. The fake
generator is used unless ``EASYORDER_EMAIL_GENERATOR=openai`` selects the
OpenAI-backed one. Tests swap generators with ``set_email_generator``.
"""

import os

_generator = None


def get_email_generator():
    """Return the configured email generator (created on first use)."""
    global _generator
    if _generator is None:
        backend = os.getenv("EASYORDER_EMAIL_GENERATOR", "fake").lower()
        if backend == "openai":
            from easyorder.notifications.openai_email import OpenAIEmailGenerator

            _generator = OpenAIEmailGenerator()
        elif backend == "fake":
            from easyorder.notifications.fake_email import FakeEmailGenerator

            _generator = FakeEmailGenerator()
        else:
            raise ValueError(f"Unknown email generator: {backend}")

    return _generator


def set_email_generator(generator):
    global _generator
    _generator = generator


def reset_email_generator():
    """Forget the current generator (useful for testing)."""
    global _generator
    _generator = None
