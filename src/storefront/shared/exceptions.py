"""Storefront error kinds.

All of them carry Protean's ``{"field": ["message", ...]}`` payload. Malformed
input is a plain ``ValidationError`` and unknown identifiers raise Protean's
``ObjectNotFoundError``; the classes below narrow ``ValidationError`` for the
conditions callers need to tell apart.
"""

from protean.exceptions import ValidationError


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the stock available in the ledger."""


class EmptyCartError(ValidationError):
    """The operation needs a cart with at least one line."""


class InvalidTransitionError(ValidationError):
    """The order state machine does not allow the requested move."""


def _names_field(field, message):
    # "product_id" counts as named by "Product 'lamp-001' not found"
    return field.split("_")[0].lower() in message.lower()


def _field_messages(field, msgs):
    for msg in msgs if isinstance(msgs, (list, tuple)) else [msgs]:
        msg = str(msg)
        if field.startswith("_") or _names_field(field, msg):
            yield msg
        else:
            yield f"{field}: {msg}"


def error_message(exc):
    """Flatten an exception's messages into one human-readable line.

    Messages that do not mention their field are prefixed with it, e.g.
    ``name: String should have at least 1 character``.
    """
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        # ObjectNotFoundError keeps its payload in args
        messages = exc.args[0]
    if isinstance(messages, dict):
        return "; ".join(msg for field, msgs in messages.items() for msg in _field_messages(str(field), msgs))
    if messages:
        return str(messages)
    return str(exc)
