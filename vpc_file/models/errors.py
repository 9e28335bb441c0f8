"""
Upstream error envelope.

The shares API reports failures as ``{"errors": [{"code", "message", "more_info"}], "trace"}``.
"""

from dataclasses import dataclass
from typing import Any, Self


@dataclass(frozen=True, kw_only=True)
class ErrorItem:
    """A single (code, message) entry of an error envelope."""

    code: str
    message: str = ""
    more_info: str = ""


@dataclass(frozen=True, kw_only=True)
class ErrorEnvelope:
    """
    Raw error body returned by the shares API.

    Attributes:
        errors: Ordered, non-empty sequence of error items.
        trace: Request trace identifier, when the API returned one.
    """

    errors: tuple[ErrorItem, ...]
    trace: str = ""

    def __post_init__(self) -> None:
        if not self.errors:
            msg = "errors must not be empty"
            raise ValueError(msg)

    @property
    def first(self) -> ErrorItem:
        return self.errors[0]

    @property
    def code(self) -> str:
        """Code of the first item, the only one used for classification."""
        return self.errors[0].code

    @classmethod
    def from_response(cls, data: Any) -> Self | None:
        """
        Build an envelope from a decoded response body.

        Returns:
            The envelope, or None if the body does not carry a usable ``errors`` array.
        """
        if not isinstance(data, dict):
            return None
        items = data.get("errors")
        if not isinstance(items, list) or not items:
            return None

        errors = tuple(
            ErrorItem(
                code=str(item.get("code") or ""),
                message=str(item.get("message") or ""),
                more_info=str(item.get("more_info") or ""),
            )
            for item in items
            if isinstance(item, dict)
        )
        if not errors:
            return None
        return cls(errors=errors, trace=str(data.get("trace") or ""))
