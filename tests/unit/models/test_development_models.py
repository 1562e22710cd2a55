"""Tests for the development status models."""

import pytest
from pydantic import ValidationError

from jira_mcp.models.jira import (
    DevBuild,
    DevelopmentInformation,
    DevPullRequest,
    DevStatusDetail,
    DevStatusResponse,
)


class TestDevStatusResponse:
    def test_pull_request_round_trip_keeps_camel_case(self, dev_status_pull_request_data):
        response = DevStatusResponse.from_api_response(dev_status_pull_request_data)

        pull_request = response.detail[0].pull_requests[0]
        assert pull_request.status == "MERGED"
        assert pull_request.destination.branch == "main"
        assert pull_request.reviewers[0].approved is True
        assert pull_request.to_simplified_dict() == {
            "id": "#12",
            "name": "Add feature",
            "status": "MERGED",
            "url": "https://bitbucket.org/acme/app/pull-requests/12",
            "source": {"branch": "feature/x"},
            "destination": {"branch": "main"},
            "reviewers": [{"name": "Reviewer", "approved": True}],
        }

    def test_all_builds_flattens_jswdd_data(self, dev_status_builds_data):
        detail = DevStatusResponse.from_api_response(dev_status_builds_data).detail[0]

        assert [build.id for build in detail.all_builds] == ["b1", "b2"]
        assert detail.all_builds[1].build_number == 42

    def test_missing_lists_default_to_empty(self):
        response = DevStatusResponse.from_api_response({})

        assert response.errors == []
        assert response.detail == []

    def test_null_lists_become_empty(self):
        response = DevStatusResponse.from_api_response(
            {
                "errors": None,
                "detail": [
                    {
                        "repositories": [{"name": "api", "commits": None}],
                        "builds": [{"id": "b1", "references": None}],
                    }
                ],
            }
        )

        assert response.errors == []
        assert response.detail[0].repositories[0].commits == []
        assert response.detail[0].builds[0].references == []

    def test_null_scalar_stays_none(self):
        pull_request = DevPullRequest.from_api_response({"name": None})

        assert pull_request.name is None

    def test_invalid_shape_raises(self):
        with pytest.raises(ValidationError):
            DevStatusResponse.from_api_response({"detail": "nope"})


def test_unknown_keys_are_preserved():
    detail = DevStatusDetail.from_api_response(
        {"branches": [{"name": "b", "customKey": {"nested": 1}}], "instance": {"id": "x"}}
    )

    assert detail.branches[0].to_simplified_dict() == {
        "name": "b",
        "customKey": {"nested": 1},
    }


def test_numeric_ids_are_coerced_to_strings():
    pull_request = DevPullRequest.from_api_response({"id": 12, "commentCount": 3})

    assert pull_request.id == "12"
    assert pull_request.comment_count == 3


def test_build_number_accepts_labels():
    assert DevBuild.from_api_response({"buildNumber": "2024.1"}).build_number == "2024.1"


class TestDevelopmentInformation:
    def test_empty_result_shape(self):
        assert DevelopmentInformation(issue_key="PROJ-1").to_simplified_dict() == {
            "issueKey": "PROJ-1",
            "branches": [],
            "pullRequests": [],
            "repositories": [],
            "builds": [],
        }

    def test_endpoint_not_found(self):
        result = DevelopmentInformation.endpoint_not_found("PROJ-1").to_simplified_dict()

        assert result["error"] == "Dev-status API endpoint not found"
        assert "message" not in result

    def test_no_integrations(self):
        result = DevelopmentInformation.no_integrations("PROJ-1").to_simplified_dict()

        assert result["message"] == "No development integrations found"
        assert "error" not in result
