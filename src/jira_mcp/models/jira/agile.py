"""
Jira agile models.

This module provides Pydantic models for Jira agile entities,
such as boards and sprints.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import Field

from ...utils.date import parse_date
from ..base import ApiModel
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID, UNKNOWN

logger = logging.getLogger("jira-mcp.models.agile")


class JiraBoard(ApiModel):
    """
    Model representing a Jira board.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    type: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraBoard":
        if not data or not isinstance(data, dict):
            return cls()

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            name=str(data.get("name", UNKNOWN)),
            type=str(data.get("type", UNKNOWN)),
        )


class JiraSprint(ApiModel):
    """
    Model representing a Jira sprint.
    """

    id: str = JIRA_DEFAULT_ID
    state: str = UNKNOWN
    name: str = UNKNOWN
    start_date: str = EMPTY_STRING
    end_date: str = EMPTY_STRING
    complete_date: str = EMPTY_STRING
    origin_board_id: str = JIRA_DEFAULT_ID
    goal: str = EMPTY_STRING

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraSprint":
        """
        Create a JiraSprint from a Jira API response.

        Args:
            data: The sprint data from the Jira agile API

        Returns:
            A JiraSprint instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary sprint data, returning default")
            return cls()

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            state=str(data.get("state", UNKNOWN)),
            name=str(data.get("name", UNKNOWN)),
            start_date=str(data.get("startDate") or EMPTY_STRING),
            end_date=str(data.get("endDate") or EMPTY_STRING),
            complete_date=str(data.get("completeDate") or EMPTY_STRING),
            origin_board_id=str(data.get("originBoardId", JIRA_DEFAULT_ID)),
            goal=str(data.get("goal") or EMPTY_STRING),
        )

    @property
    def start(self) -> datetime | None:
        return parse_date(self.start_date) if self.start_date else None

    @property
    def end(self) -> datetime | None:
        return parse_date(self.end_date) if self.end_date else None

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "state": self.state,
        }
        if self.goal:
            result["goal"] = self.goal
        if self.start_date:
            result["start_date"] = self.start_date
        if self.end_date:
            result["end_date"] = self.end_date
        return result


class JiraSprintReport(ApiModel):
    """
    Story point and bug summary of a sprint with a daily burndown.

    ``burndown`` holds one ``(YYYY-MM-DD, remaining points)`` pair per day
    from the sprint start to its end.
    """

    sprint: JiraSprint = JiraSprint()
    total_points: float = 0.0
    bug_count: int = 0
    burndown: list[tuple[str, float]] = Field(default_factory=list)

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraSprintReport":
        return cls.model_validate(data)
