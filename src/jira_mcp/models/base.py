"""
Base models shared by the Jira API models.

Every model converts a raw REST payload with `from_api_response` and
exposes a JSON-friendly view with `to_simplified_dict`.
"""

from typing import Any, TypeVar

from pydantic import BaseModel

from ..utils.date import format_display_datetime
from .constants import EMPTY_STRING

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for all API models with common conversion methods.
    """

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Convert an API response to a model instance.

        Args:
            data: The API response data
            **kwargs: Additional context parameters

        Returns:
            An instance of the model

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert the model to a dictionary without unset (None) values."""
        return self.model_dump(exclude_none=True)


class TimestampMixin:
    """
    Mixin for rendering Atlassian timestamps.
    """

    @staticmethod
    def format_timestamp(timestamp: str | None) -> str:
        """
        Format a timestamp such as ``2024-01-01T10:00:00.000+0000`` as
        ``2024-01-01 10:00:00``; invalid input is returned unchanged.
        """
        if not timestamp:
            return EMPTY_STRING
        return format_display_datetime(timestamp)
