"""Module for Jira sprints operations."""

import logging
from collections import defaultdict
from datetime import timedelta

from requests.exceptions import HTTPError

from ..exceptions import MCPJiraAuthenticationError
from ..models.constants import UNKNOWN
from ..models.jira import JiraIssue, JiraSprint, JiraSprintReport
from .client import JiraClient
from .constants import BUG_ISSUE_TYPE, SPRINT_REPORT_MAX_ISSUES, SPRINTS_MAX_RESULTS
from .utils import parse_numeric_id

logger = logging.getLogger("jira-mcp.jira.sprints")


class SprintsMixin(JiraClient):
    """Mixin for Jira sprints operations."""

    def get_board_sprints(
        self, board_id: int, state: str | None = None, limit: int = SPRINTS_MAX_RESULTS
    ) -> list[JiraSprint]:
        """
        Get the sprints of a board.

        Args:
            board_id: Board ID
            state: Comma-separated sprint states (active, future, closed);
                all states when None
            limit: Maximum number of sprints to return

        Returns:
            The board's sprints
        """
        try:
            sprints = self.jira.get_all_sprints_from_board(
                board_id=board_id, state=state, start=0, limit=limit
            )
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get sprints of board {board_id}")

        values = sprints.get("values", []) if isinstance(sprints, dict) else []
        return [JiraSprint.from_api_response(sprint) for sprint in values]

    def list_open_sprints(self, board_ids: list[int]) -> list[tuple[int, JiraSprint]]:
        """Active and future sprints of each board, paired with the board id."""
        return [
            (board_id, sprint)
            for board_id in board_ids
            for sprint in self.get_board_sprints(board_id, state="active,future")
        ]

    def find_active_sprint(self, board_ids: list[int]) -> tuple[int, JiraSprint] | None:
        """
        Return the first active sprint across the boards.

        Boards whose sprints cannot be read are skipped.
        """
        for board_id in board_ids:
            try:
                sprints = self.get_board_sprints(board_id, state="active")
            except MCPJiraAuthenticationError:
                raise
            except HTTPError as http_err:
                logger.warning(f"Skipping board {board_id}: {http_err}")
                continue
            if sprints:
                return board_id, sprints[0]
        return None

    def get_sprint(self, sprint_id: str) -> JiraSprint:
        """
        Get a sprint by id.

        Raises:
            ValueError: If the sprint id is not numeric
        """
        numeric_id = parse_numeric_id(sprint_id, "sprint_id")
        try:
            sprint = self.jira.get_sprint(numeric_id)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get sprint {sprint_id}")

        if not isinstance(sprint, dict):
            msg = f"Unexpected return value type from `jira.get_sprint`: {type(sprint)}"
            logger.error(msg)
            raise TypeError(msg)

        return JiraSprint.from_api_response(sprint)

    def move_issues_to_sprint(self, sprint_id: str, issue_keys: list[str]) -> None:
        """
        Move issues into an open or active sprint.

        Args:
            sprint_id: The target sprint id
            issue_keys: The keys of the issues to move
        """
        numeric_id = parse_numeric_id(sprint_id, "sprint_id")
        try:
            self.jira.add_issues_to_sprint(numeric_id, issue_keys)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"move issues to sprint {sprint_id}")

        logger.info(f"Moved {len(issue_keys)} issue(s) to sprint {sprint_id}")

    def get_sprint_issues(
        self, sprint_id: str, limit: int = SPRINT_REPORT_MAX_ISSUES
    ) -> list[JiraIssue]:
        """Get the issues of a sprint with their changelogs."""
        numeric_id = parse_numeric_id(sprint_id, "sprint_id")
        try:
            response = self.jira.get(
                f"rest/agile/1.0/sprint/{numeric_id}/issue",
                params={
                    "startAt": 0,
                    "maxResults": limit,
                    "fields": "issuetype,status,summary",
                    "expand": "changelog",
                },
            )
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get issues of sprint {sprint_id}")

        issues = response.get("issues", []) if isinstance(response, dict) else []
        return [JiraIssue.from_api_response(issue) for issue in issues]

    def get_sprint_report(self, sprint_id: str) -> JiraSprintReport:
        """
        Summarize a sprint: story points, bug count and a daily burndown.

        Story points come from the last "Story point estimate" change in each
        issue's changelog. An issue's points burn on the day it first reached
        Done, Closed or Resolved; the remaining total never drops below zero.

        Args:
            sprint_id: The sprint id

        Returns:
            The sprint report
        """
        sprint = self.get_sprint(sprint_id)
        issues = self.get_sprint_issues(sprint_id)

        total_points = 0.0
        bug_count = 0
        burned: dict[str, float] = defaultdict(float)
        for issue in issues:
            if issue.issue_type and issue.issue_type.name == BUG_ISSUE_TYPE:
                bug_count += 1
            points = issue.story_points
            total_points += points
            done_at = issue.done_at
            if done_at is not None:
                burned[done_at.strftime("%Y-%m-%d")] += points

        burndown: list[tuple[str, float]] = []
        start, end = sprint.start, sprint.end
        if start is not None and end is not None:
            remaining = total_points
            day = start
            while day <= end:
                key = day.strftime("%Y-%m-%d")
                if key in burned:
                    remaining = max(remaining - burned[key], 0.0)
                burndown.append((key, remaining))
                day += timedelta(days=1)
        else:
            logger.debug(
                f"Sprint {sprint_id} ({sprint.name or UNKNOWN}) has no start/end date; "
                "burndown is empty"
            )

        return JiraSprintReport(
            sprint=sprint,
            total_points=total_points,
            bug_count=bug_count,
            burndown=burndown,
        )
