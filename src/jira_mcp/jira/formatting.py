"""Module for Jira content formatting utilities."""

import logging

from ..models.constants import UNASSIGNED, UNKNOWN
from ..models.jira import (
    JiraAttachment,
    JiraComment,
    JiraComponent,
    JiraIssue,
    JiraIssueLink,
    JiraIssueType,
    JiraIssueTypeStatuses,
    JiraPriority,
    JiraSprint,
    JiraSprintReport,
    JiraUser,
    JiraVersion,
    JiraWorklog,
)
from .client import JiraClient
from .constants import BUG_LINK_HINT

logger = logging.getLogger("jira-mcp.jira.formatting")


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _person(label: str, user: JiraUser | None) -> str:
    if user is None:
        return f"{label}: {UNASSIGNED}"
    return f"{label}: {user.format_with_email()}"


def _named_list(title: str, items: list[JiraComponent]) -> list[str]:
    if not items:
        return []
    return [f"{title}:"] + [f"- {item.format_line()}" for item in items]


class FormattingMixin(JiraClient):
    """Mixin for Jira content formatting operations.

    Renders the models returned by the other mixins into the plain-text
    blocks the MCP tools return.
    """

    def format_issue(self, issue: JiraIssue) -> str:
        """
        Format an issue for display, one ``Label: value`` line per known field.

        Lines are only emitted when the field has data, except Priority,
        Reporter and Assignee which always appear.

        Args:
            issue: The issue to format

        Returns:
            The formatted issue text
        """
        lines = [f"Key: {issue.key}"]
        if issue.id:
            lines.append(f"ID: {issue.id}")
        if issue.url:
            lines.append(f"URL: {issue.url}")
        if issue.summary:
            lines.append(f"Summary: {issue.summary}")
        if issue.description is not None:
            lines.append(f"Description: {issue.description}")

        if issue.issue_type:
            lines.append(f"Type: {issue.issue_type.name}")
            if issue.issue_type.description:
                lines.append(f"Type Description: {issue.issue_type.description}")
        if issue.status:
            lines.append(f"Status: {issue.status.name}")
            if issue.status.description:
                lines.append(f"Status Description: {issue.status.description}")

        lines.append(f"Priority: {(issue.priority or JiraPriority()).name}")

        if issue.resolution:
            lines.append(f"Resolution: {issue.resolution.name}")
            if issue.resolution.description:
                lines.append(f"Resolution Description: {issue.resolution.description}")
        if issue.resolution_date:
            lines.append(f"Resolution Date: {issue.resolution_date}")

        lines.append(_person("Reporter", issue.reporter))
        lines.append(_person("Assignee", issue.assignee))
        if issue.creator:
            lines.append(_person("Creator", issue.creator))

        if issue.created:
            lines.append(f"Created: {issue.created}")
        if issue.updated:
            lines.append(f"Updated: {issue.updated}")

        if issue.project:
            lines.append(f"Project: {issue.project.format_label()}")
        if issue.parent:
            parent = f"Parent: {issue.parent.key}"
            if issue.parent.summary:
                parent += f" - {issue.parent.summary}"
            lines.append(parent)

        if issue.labels:
            lines.append(f"Labels: {', '.join(issue.labels)}")
        lines.extend(_named_list("Components", issue.components))
        lines.extend(_named_list("Fix Versions", issue.fix_versions))
        lines.extend(_named_list("Affected Versions", issue.affected_versions))

        if issue.subtasks:
            lines.append("Subtasks:")
            for subtask in issue.subtasks:
                line = f"- {subtask.key}"
                if subtask.summary:
                    line += f": {subtask.summary}"
                if subtask.status and subtask.status != UNKNOWN:
                    line += f" [{subtask.status}]"
                lines.append(line)

        if issue.issue_links:
            lines.append("Issue Links:")
            lines.extend(self._format_issue_link_lines(issue.issue_links))

        if issue.attachments:
            lines.append("Attachments:")
            lines.extend(
                f"- {attachment.filename} (ID: {attachment.id}, {attachment.size} bytes)"
                for attachment in issue.attachments
            )

        if issue.watch_count is not None:
            lines.append(f"Watchers: {issue.watch_count}")
        if issue.votes is not None:
            lines.append(f"Votes: {issue.votes}")
        if issue.comment_total > 0:
            lines.append(f"Comments: {issue.comment_total} total")
        if issue.worklog_total > 0:
            lines.append(f"Worklogs: {issue.worklog_total} entries")

        if issue.transitions:
            lines.append("")
            lines.append("Available Transitions:")
            lines.extend(
                f"- {transition.name} (ID: {transition.id})"
                for transition in issue.transitions
            )

        estimate = issue.story_point_estimate
        if estimate:
            lines.append(f"Story Point Estimate: {estimate}")

        return "\n".join(lines) + "\n"

    @staticmethod
    def _format_issue_link_lines(links: list[JiraIssueLink]) -> list[str]:
        lines = []
        for link in links:
            for direction, linked in (
                (link.type.outward, link.outward_issue),
                (link.type.inward, link.inward_issue),
            ):
                if linked is None:
                    continue
                line = f"- {direction} {linked.key}"
                if linked.summary:
                    line += f": {linked.summary}"
                lines.append(line)
        return lines

    def format_search_results(self, issues: list[JiraIssue]) -> str:
        if not issues:
            return "No issues found matching the search criteria."
        return "\n===\n".join(self.format_issue(issue) for issue in issues)

    def format_created_issue(
        self, created: dict[str, str], parent_key: str | None = None, issue_type: str = ""
    ) -> str:
        """
        Format the result of an issue creation.

        Args:
            created: The ``{id, key, self}`` payload returned by Jira
            parent_key: Set for child issues
            issue_type: The requested issue type, used for the bug hint

        Returns:
            The creation summary
        """
        body = (
            f"Key: {created.get('key', '')}\n"
            f"ID: {created.get('id', '')}\n"
            f"URL: {created.get('self', '')}"
        )
        if parent_key is None:
            return f"Issue created successfully!\n{body}"

        result = f"Child issue created successfully!\n{body}\nParent: {parent_key}"
        if issue_type.lower() == "bug":
            result += f"\n\n{BUG_LINK_HINT}"
        return result

    def format_issue_types(self, issue_types: list[JiraIssueType]) -> str:
        if not issue_types:
            return "No issue types found for this project."

        result = "Available Issue Types:\n\n"
        for issue_type in issue_types:
            subtask = " (Subtask Type)" if issue_type.subtask else ""
            result += f"ID: {issue_type.id}\nName: {issue_type.name}{subtask}\n"
            if issue_type.description:
                result += f"Description: {issue_type.description}\n"
            if issue_type.icon_url:
                result += f"Icon URL: {issue_type.icon_url}\n"
            if issue_type.scope:
                result += f"Scope: {issue_type.scope}\n"
            result += "\n"
        return result

    def format_added_comment(self, comment: JiraComment) -> str:
        return (
            "Comment added successfully!\n"
            f"ID: {comment.id}\n"
            f"Author: {comment.author_name}\n"
            f"Created: {comment.created}"
        )

    def format_comments(self, comments: list[JiraComment]) -> str:
        if not comments:
            return "No comments found for this issue."

        return "".join(
            f"ID: {comment.id}\n"
            f"Author: {comment.author_name}\n"
            f"Created: {comment.created}\n"
            f"Updated: {comment.updated}\n"
            f"Body: {comment.body}\n\n"
            for comment in comments
        )

    def format_worklog(
        self, issue_key: str, worklog: JiraWorklog, time_spent: str, seconds: int
    ) -> str:
        author = worklog.author.display_name if worklog.author else UNKNOWN
        return (
            "Worklog added successfully!\n"
            f"Issue: {issue_key}\n"
            f"Worklog ID: {worklog.id}\n"
            f"Time Spent: {time_spent} ({seconds} seconds)\n"
            f"Date Started: {worklog.started}\n"
            f"Author: {author}"
        )

    def format_related_issues(self, issue_key: str, links: list[JiraIssueLink]) -> str:
        """
        Format the issues linked to ``issue_key``.

        Inward links are preferred when a link carries both directions;
        links without a counterpart are skipped.
        """
        related = [pair for pair in (link.related for link in links) if pair]
        if not related:
            return f"Issue {issue_key} has no linked issues."

        result = f"Related issues for {issue_key}:\n\n"
        for relationship, linked in related:
            result += (
                f"Relationship: {relationship}\n"
                f"Issue: {linked.key}\n"
                f"Summary: {linked.summary}\n"
                f"Status: {linked.status}\n\n"
            )
        return result

    def format_sprint_move(self, sprint_id: str, issue_keys: list[str]) -> str:
        return (
            f"Successfully moved {len(issue_keys)} issue(s) to sprint {sprint_id}:\n"
            f"Issues moved: {', '.join(issue_keys)}\n\n"
            f"Sprint ID: {sprint_id}\n"
            "Operation completed successfully."
        )

    def format_sprint_list(self, sprints: list[tuple[int, JiraSprint]]) -> str:
        if not sprints:
            return "No sprints found."
        return "\n".join(
            f"ID: {sprint.id}\n"
            f"Name: {sprint.name}\n"
            f"State: {sprint.state}\n"
            f"StartDate: {sprint.start_date}\n"
            f"EndDate: {sprint.end_date}\n"
            f"Board ID: {board_id}\n"
            for board_id, sprint in sprints
        )

    def format_sprint(self, sprint: JiraSprint) -> str:
        return (
            "Sprint Details:\n"
            f"ID: {sprint.id}\n"
            f"Name: {sprint.name}\n"
            f"State: {sprint.state}\n"
            f"StartDate: {sprint.start_date}\n"
            f"EndDate: {sprint.end_date}\n"
            f"CompleteDate: {sprint.complete_date}\n"
            f"OriginBoardID: {sprint.origin_board_id}\n"
            f"Goal: {sprint.goal}"
        )

    def format_active_sprint(self, active: tuple[int, JiraSprint] | None) -> str:
        if active is None:
            return "No active sprint found."
        board_id, sprint = active
        return (
            "Active Sprint:\n"
            f"ID: {sprint.id}\n"
            f"Name: {sprint.name}\n"
            f"State: {sprint.state}\n"
            f"StartDate: {sprint.start_date}\n"
            f"EndDate: {sprint.end_date}\n"
            f"Board ID: {board_id}\n"
            f"Goal: {sprint.goal}"
        )

    def format_sprint_report(self, report: JiraSprintReport) -> str:
        burndown = "\n".join(
            f"{day}: {remaining:.1f}" for day, remaining in report.burndown
        )
        return (
            "Sprint Report\n"
            f"Name: {report.sprint.name}\n"
            f"State: {report.sprint.state}\n"
            f"Total Points: {report.total_points:.1f}\n"
            f"Bug Count: {report.bug_count}\n\n"
            f"Burndown:\n{burndown}"
        )

    def format_statuses(self, issue_types: list[JiraIssueTypeStatuses]) -> str:
        if not issue_types:
            return "No issue types found for this project."

        result = "Available Statuses:\n"
        for issue_type in issue_types:
            result += f"\nIssue Type: {issue_type.name}\n"
            for status in issue_type.statuses:
                result += f"  - {status.name}: {status.id}\n"
        return result

    def format_version(self, version: JiraVersion) -> str:
        result = f"Version Details:\n\nID: {version.id}\nName: {version.name}\n"
        if version.description:
            result += f"Description: {version.description}\n"
        if version.project_id:
            result += f"Project ID: {version.project_id}\n"
        result += f"Released: {_bool(version.released)}\n"
        result += f"Archived: {_bool(version.archived)}\n"
        if version.release_date:
            result += f"Release Date: {version.release_date}\n"
        if version.url:
            result += f"URL: {version.url}\n"
        return result

    def format_project_versions(
        self, project_key: str, versions: list[JiraVersion]
    ) -> str:
        if not versions:
            return f"No versions found for project {project_key}."

        blocks = []
        for version in versions:
            block = f"ID: {version.id}\nName: {version.name}\n"
            if version.description:
                block += f"Description: {version.description}\n"
            block += f"Status: {version.status}\n"
            if version.release_date:
                block += f"Release Date: {version.release_date}\n"
            blocks.append(block)
        return f"Project {project_key} Versions:\n\n" + "\n".join(blocks)

    def format_downloaded_attachment(
        self, path: str, attachment: JiraAttachment, size: int
    ) -> str:
        return (
            "Attachment downloaded successfully!\n"
            f"File: {path}\n"
            f"Filename: {attachment.filename}\n"
            f"Size: {size} bytes\n"
            f"MIME Type: {attachment.content_type or UNKNOWN}"
        )
