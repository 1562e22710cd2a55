"""Tests for the Jira Boards mixin."""

import pytest

from jira_mcp.jira.boards import BoardsMixin


class TestBoardsMixin:
    """Tests for the BoardsMixin class."""

    @pytest.fixture
    def boards_mixin(self, jira_client):
        mixin = BoardsMixin(config=jira_client.config)
        mixin.jira = jira_client.jira
        return mixin

    def test_get_project_boards(self, boards_mixin):
        boards_mixin.jira.get_all_agile_boards.return_value = {
            "values": [
                {"id": 1, "name": "PROJ board", "type": "scrum"},
                {"id": 2, "name": "PROJ kanban", "type": "kanban"},
            ]
        }

        boards = boards_mixin.get_project_boards("PROJ")

        boards_mixin.jira.get_all_agile_boards.assert_called_once_with(
            project_key="PROJ", start=0, limit=50
        )
        assert [(b.id, b.type) for b in boards] == [("1", "scrum"), ("2", "kanban")]

    def test_resolve_board_ids_explicit_board(self, boards_mixin):
        assert boards_mixin.resolve_board_ids(board_id="42", project_key="PROJ") == [42]
        boards_mixin.jira.get_all_agile_boards.assert_not_called()

    def test_resolve_board_ids_invalid_board(self, boards_mixin):
        with pytest.raises(ValueError, match="invalid board_id"):
            boards_mixin.resolve_board_ids(board_id="abc")

    def test_resolve_board_ids_from_project(self, boards_mixin):
        boards_mixin.jira.get_all_agile_boards.return_value = {
            "values": [{"id": 3, "name": "A"}, {"id": 5, "name": "B"}]
        }

        assert boards_mixin.resolve_board_ids(project_key="PROJ") == [3, 5]

    def test_resolve_board_ids_project_without_boards(self, boards_mixin):
        boards_mixin.jira.get_all_agile_boards.return_value = {"values": []}

        with pytest.raises(ValueError, match="no boards found for project: PROJ"):
            boards_mixin.resolve_board_ids(project_key="PROJ")

    def test_resolve_board_ids_requires_an_argument(self, boards_mixin):
        with pytest.raises(ValueError, match="either board_id or project_key"):
            boards_mixin.resolve_board_ids()
