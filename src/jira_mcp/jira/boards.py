"""Module for Jira boards operations."""

import logging

from requests.exceptions import HTTPError

from ..models.jira import JiraBoard
from .client import JiraClient
from .constants import BOARDS_MAX_RESULTS

logger = logging.getLogger("jira-mcp.jira.boards")


class BoardsMixin(JiraClient):
    """Mixin for Jira boards operations."""

    def get_project_boards(
        self, project_key: str, limit: int = BOARDS_MAX_RESULTS
    ) -> list[JiraBoard]:
        """
        Get the agile boards of a project.

        Args:
            project_key: Project key (e.g., PROJ)
            limit: Maximum number of boards to return

        Returns:
            The project's boards
        """
        try:
            boards = self.jira.get_all_agile_boards(
                project_key=project_key, start=0, limit=limit
            )
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get boards of project {project_key}")

        values = boards.get("values", []) if isinstance(boards, dict) else []
        return [JiraBoard.from_api_response(board) for board in values]

    def resolve_board_ids(
        self, board_id: str | None = None, project_key: str | None = None
    ) -> list[int]:
        """
        Determine which boards a sprint query should look at.

        An explicit board id wins; otherwise every board of the project.

        Raises:
            ValueError: If neither argument is given, the board id is not
                numeric, or the project has no boards
        """
        if board_id:
            try:
                return [int(board_id)]
            except ValueError as err:
                raise ValueError(f"invalid board_id: {board_id}") from err

        if project_key:
            boards = self.get_project_boards(project_key)
            if not boards:
                raise ValueError(f"no boards found for project: {project_key}")
            return [int(board.id) for board in boards]

        raise ValueError("either board_id or project_key argument is required")
