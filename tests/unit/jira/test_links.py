"""Tests for the Jira Links mixin."""

import pytest

from jira_mcp.jira.links import LinksMixin


class TestLinksMixin:
    """Tests for the LinksMixin class."""

    @pytest.fixture
    def links_mixin(self, jira_client):
        mixin = LinksMixin(config=jira_client.config)
        mixin.jira = jira_client.jira
        return mixin

    def test_get_issue_links(self, links_mixin):
        links_mixin.jira.get_issue.return_value = {
            "key": "PROJ-1",
            "fields": {
                "issuelinks": [
                    {
                        "id": "1",
                        "type": {
                            "name": "Blocks",
                            "inward": "is blocked by",
                            "outward": "blocks",
                        },
                        "inwardIssue": {
                            "key": "PROJ-2",
                            "fields": {"summary": "Other", "status": {"name": "Open"}},
                        },
                    }
                ]
            },
        }

        links = links_mixin.get_issue_links("PROJ-1")

        links_mixin.jira.get_issue.assert_called_once_with("PROJ-1", fields="issuelinks")
        assert len(links) == 1
        relationship, linked = links[0].related
        assert relationship == "is blocked by"
        assert linked.key == "PROJ-2"
        assert linked.status == "Open"

    def test_get_issue_links_none(self, links_mixin):
        links_mixin.jira.get_issue.return_value = {"key": "PROJ-1", "fields": {}}

        assert links_mixin.get_issue_links("PROJ-1") == []

    def test_link_issues(self, links_mixin):
        links_mixin.link_issues("PROJ-1", "PROJ-2", "Blocks")

        links_mixin.jira.create_issue_link.assert_called_once_with(
            {
                "type": {"name": "Blocks"},
                "inwardIssue": {"key": "PROJ-1"},
                "outwardIssue": {"key": "PROJ-2"},
            }
        )

    def test_link_issues_with_comment(self, links_mixin):
        links_mixin.link_issues("PROJ-1", "PROJ-2", "Relates", comment="See also")

        data = links_mixin.jira.create_issue_link.call_args.args[0]
        assert data["comment"] == {"body": "See also"}
