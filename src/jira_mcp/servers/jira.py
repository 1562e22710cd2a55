"""Jira FastMCP server instance and tool definitions."""

import asyncio
import json
import logging
import threading
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from jira_mcp.jira.constants import DEFAULT_ISSUE_EXPAND
from jira_mcp.jira.utils import parse_time_spent, split_issue_keys
from jira_mcp.servers.dependencies import get_jira_fetcher
from jira_mcp.utils.decorators import check_write_access, require_non_empty

logger = logging.getLogger("jira-mcp.servers.jira")

jira_mcp = FastMCP(
    name="Jira MCP Service",
    instructions="Provides tools for interacting with Atlassian Jira.",
)

IssueKey = Annotated[str, Field(description="Jira issue key (e.g., 'PROJ-123')")]
ProjectKey = Annotated[str, Field(description="Project key (e.g., 'PROJ')")]


@jira_mcp.tool(tags={"jira", "read"})
async def get_issue(
    ctx: Context,
    issue_key: IssueKey,
    fields: Annotated[
        str | None,
        Field(
            description=(
                "Comma-separated fields to return (e.g., 'summary,status,assignee'). "
                "All fields when omitted."
            ),
            default=None,
        ),
    ] = None,
    expand: Annotated[
        str | None,
        Field(
            description=(
                "Comma-separated fields to expand, e.g. 'transitions' (available "
                "status transitions), 'changelog' (history)."
            ),
            default=DEFAULT_ISSUE_EXPAND,
        ),
    ] = DEFAULT_ISSUE_EXPAND,
) -> str:
    """Get details of a specific Jira issue, including its transitions and subtasks.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        fields: Fields to return.
        expand: Fields to expand.

    Returns:
        The issue formatted as readable text.
    """
    require_non_empty(issue_key=issue_key)
    jira = await get_jira_fetcher(ctx)
    issue = jira.get_issue(issue_key, fields=fields, expand=expand or None)
    return jira.format_issue(issue)


@jira_mcp.tool(tags={"jira", "read"})
async def search_issue(
    ctx: Context,
    jql: Annotated[
        str,
        Field(
            description=(
                "JQL query string (Jira Query Language). Examples:\n"
                "- Find by status: \"status = 'In Progress' AND project = PROJ\"\n"
                '- Find by assignee: "assignee = currentUser()"\n'
                '- Find recently updated: "updated >= -7d AND project = PROJ"\n'
                '- Find by fix version: "project = PROJ AND fixVersion = \\"1.0\\""'
            )
        ),
    ],
    fields: Annotated[
        str | None,
        Field(
            description="Comma-separated fields to return in the results. All fields when omitted.",
            default=None,
        ),
    ] = None,
    expand: Annotated[
        str | None,
        Field(
            description="Comma-separated fields to expand for each issue.",
            default=DEFAULT_ISSUE_EXPAND,
        ),
    ] = DEFAULT_ISSUE_EXPAND,
) -> str:
    """Search Jira issues using JQL (Jira Query Language).

    At most 30 issues are returned, separated by '==='.

    Args:
        ctx: The FastMCP context.
        jql: JQL query string.
        fields: Fields to return.
        expand: Fields to expand.

    Returns:
        The matching issues formatted as readable text.
    """
    require_non_empty(jql=jql)
    jira = await get_jira_fetcher(ctx)
    issues = jira.search_issues(jql, fields=fields, expand=expand or None)
    return jira.format_search_results(issues)


@jira_mcp.tool(tags={"jira", "read"})
async def list_issue_types(
    ctx: Context, project_key: ProjectKey
) -> str:
    """List the issue types available in a project.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.

    Returns:
        The issue types with their IDs, names and descriptions.
    """
    require_non_empty(project_key=project_key)
    jira = await get_jira_fetcher(ctx)
    return jira.format_issue_types(jira.get_project_issue_types(project_key))


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def create_issue(
    ctx: Context,
    project_key: ProjectKey,
    summary: Annotated[str, Field(description="Summary/title of the issue")],
    description: Annotated[str, Field(description="Issue description")],
    issue_type: Annotated[
        str,
        Field(
            description=(
                "Issue type (e.g. 'Task', 'Bug', 'Story'). "
                "Use list_issue_types to see the types of a project."
            )
        ),
    ],
) -> str:
    """Create a new Jira issue.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.
        summary: Issue summary.
        description: Issue description.
        issue_type: Issue type name.

    Returns:
        The key, ID and URL of the created issue.

    Raises:
        ValueError: If in read-only mode or a required argument is blank.
    """
    require_non_empty(
        project_key=project_key,
        summary=summary,
        description=description,
        issue_type=issue_type,
    )
    jira = await get_jira_fetcher(ctx)
    created = jira.create_issue(
        project_key=project_key,
        summary=summary,
        issue_type=issue_type,
        description=description,
    )
    return jira.format_created_issue(created)


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def create_child_issue(
    ctx: Context,
    parent_issue_key: Annotated[
        str, Field(description="Key of the parent issue (e.g., 'PROJ-123')")
    ],
    summary: Annotated[str, Field(description="Summary/title of the child issue")],
    description: Annotated[str, Field(description="Child issue description")],
    issue_type: Annotated[
        str | None,
        Field(
            description="Issue type of the child issue. Defaults to 'Subtask'.",
            default=None,
        ),
    ] = None,
) -> str:
    """Create a child issue under a parent issue, in the parent's project.

    A Bug child comes with a reminder to link it to the Story or Task it affects.

    Args:
        ctx: The FastMCP context.
        parent_issue_key: Parent issue key.
        summary: Child issue summary.
        description: Child issue description.
        issue_type: Child issue type.

    Returns:
        The key, ID and URL of the created issue and its parent.
    """
    require_non_empty(
        parent_issue_key=parent_issue_key, summary=summary, description=description
    )
    jira = await get_jira_fetcher(ctx)
    created = jira.create_child_issue(
        parent_issue_key=parent_issue_key,
        summary=summary,
        description=description,
        issue_type=issue_type,
    )
    return jira.format_created_issue(
        created, parent_key=parent_issue_key, issue_type=issue_type or ""
    )


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def update_issue(
    ctx: Context,
    issue_key: IssueKey,
    summary: Annotated[
        str | None, Field(description="New summary/title", default=None)
    ] = None,
    description: Annotated[
        str | None, Field(description="New description", default=None)
    ] = None,
) -> str:
    """Update the summary and/or description of an issue.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        summary: New summary.
        description: New description.

    Returns:
        A confirmation message.

    Raises:
        ValueError: If neither summary nor description is given.
    """
    require_non_empty(issue_key=issue_key)
    if not summary and not description:
        raise ValueError("At least one of summary or description must be provided")
    jira = await get_jira_fetcher(ctx)
    jira.update_issue(issue_key, summary=summary, description=description)
    return "Issue updated successfully!"


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def add_comment(
    ctx: Context,
    issue_key: IssueKey,
    comment: Annotated[str, Field(description="Comment text")],
) -> str:
    """Add a comment to a Jira issue.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        comment: Comment text.

    Returns:
        The ID, author and creation date of the new comment.
    """
    require_non_empty(issue_key=issue_key, comment=comment)
    jira = await get_jira_fetcher(ctx)
    return jira.format_added_comment(jira.add_comment(issue_key, comment))


@jira_mcp.tool(tags={"jira", "read"})
async def get_comments(ctx: Context, issue_key: IssueKey) -> str:
    """Get the comments of a Jira issue (up to 50).

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.

    Returns:
        The comments with author, dates and body.
    """
    require_non_empty(issue_key=issue_key)
    jira = await get_jira_fetcher(ctx)
    return jira.format_comments(jira.get_issue_comments(issue_key))


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def add_worklog(
    ctx: Context,
    issue_key: IssueKey,
    time_spent: Annotated[
        str,
        Field(
            description=(
                "Time spent, e.g. '3h', '30m', '1h 30m', '1d 2h' "
                "(1d = 8h, 1w = 5d) or plain seconds ('3600')."
            )
        ),
    ],
    comment: Annotated[
        str | None, Field(description="Optional worklog comment", default=None)
    ] = None,
    started: Annotated[
        str | None,
        Field(
            description=(
                "Optional start time in ISO 8601 format "
                "(e.g. '2023-05-01T10:00:00.000+0000'). Defaults to now."
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Log time spent on a Jira issue.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        time_spent: Time spent.
        comment: Optional worklog comment.
        started: Optional start time.

    Returns:
        A summary of the created worklog.

    Raises:
        ValueError: If time_spent cannot be parsed.
    """
    require_non_empty(issue_key=issue_key, time_spent=time_spent)
    seconds = parse_time_spent(time_spent)
    jira = await get_jira_fetcher(ctx)
    worklog = jira.add_worklog(
        issue_key, time_spent=time_spent, comment=comment, started=started
    )
    return jira.format_worklog(issue_key, worklog, time_spent, seconds)


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def transition_issue(
    ctx: Context,
    issue_key: IssueKey,
    transition_id: Annotated[
        str,
        Field(
            description=(
                "ID of the transition to perform. get_issue lists the "
                "available transitions of an issue."
            )
        ),
    ],
    comment: Annotated[
        str | None,
        Field(description="Optional comment to add with the transition", default=None),
    ] = None,
) -> str:
    """Transition an issue to a new status through its workflow.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        transition_id: Transition ID.
        comment: Optional comment.

    Returns:
        A confirmation message.
    """
    require_non_empty(issue_key=issue_key, transition_id=transition_id)
    jira = await get_jira_fetcher(ctx)
    jira.transition_issue(issue_key, transition_id, comment=comment)
    return "Issue transition completed successfully"


@jira_mcp.tool(tags={"jira", "read"})
async def get_related_issues(
    ctx: Context, issue_key: IssueKey
) -> str:
    """Get the issues linked to a Jira issue and how they are related.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.

    Returns:
        The linked issues with relationship, summary and status.
    """
    require_non_empty(issue_key=issue_key)
    jira = await get_jira_fetcher(ctx)
    return jira.format_related_issues(issue_key, jira.get_issue_links(issue_key))


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def link_issues(
    ctx: Context,
    inward_issue: Annotated[
        str, Field(description="Key of the inward issue (e.g., 'PROJ-1')")
    ],
    outward_issue: Annotated[
        str, Field(description="Key of the outward issue (e.g., 'PROJ-2')")
    ],
    link_type: Annotated[
        str,
        Field(description="Link type name (e.g., 'Blocks', 'Duplicate', 'Relates')"),
    ],
    comment: Annotated[
        str | None, Field(description="Optional comment for the link", default=None)
    ] = None,
) -> str:
    """Create a link between two Jira issues.

    Args:
        ctx: The FastMCP context.
        inward_issue: Inward issue key.
        outward_issue: Outward issue key.
        link_type: Link type name.
        comment: Optional comment.

    Returns:
        A confirmation message.
    """
    require_non_empty(
        inward_issue=inward_issue, outward_issue=outward_issue, link_type=link_type
    )
    jira = await get_jira_fetcher(ctx)
    jira.link_issues(inward_issue, outward_issue, link_type, comment=comment)
    return (
        f"Successfully linked issues {inward_issue} and {outward_issue} "
        f'with link type "{link_type}"'
    )


@jira_mcp.tool(tags={"jira", "read"})
async def get_issue_history(
    ctx: Context, issue_key: IssueKey
) -> str:
    """Get the change history of a Jira issue.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.

    Returns:
        JSON string with every change: date, author and changed fields.
    """
    require_non_empty(issue_key=issue_key)
    jira = await get_jira_fetcher(ctx)
    changelogs = jira.get_issue_history(issue_key)
    if not changelogs:
        return f"No history found for issue {issue_key}"

    result = {
        "issue_key": issue_key,
        "history": [changelog.to_simplified_dict() for changelog in changelogs],
        "count": len(changelogs),
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def move_issues_to_sprint(
    ctx: Context,
    sprint_id: Annotated[str, Field(description="ID of the target sprint")],
    issue_keys: Annotated[
        str,
        Field(
            description=(
                "Comma-separated issue keys to move (e.g., 'PROJ-1,PROJ-2'), "
                "at most 50."
            )
        ),
    ],
) -> str:
    """Move issues into an open or active sprint.

    Args:
        ctx: The FastMCP context.
        sprint_id: Sprint ID.
        issue_keys: Comma-separated issue keys.

    Returns:
        A summary of the moved issues.
    """
    require_non_empty(sprint_id=sprint_id, issue_keys=issue_keys)
    keys = split_issue_keys(issue_keys)
    jira = await get_jira_fetcher(ctx)
    jira.move_issues_to_sprint(sprint_id, keys)
    return jira.format_sprint_move(sprint_id, keys)


BoardId = Annotated[
    str | None,
    Field(description="Numeric board ID. Takes precedence over project_key.", default=None),
]
BoardProjectKey = Annotated[
    str | None,
    Field(description="Project key whose boards are used (e.g., 'PROJ')", default=None),
]


@jira_mcp.tool(tags={"jira", "read"})
async def list_sprints(
    ctx: Context,
    board_id: BoardId = None,
    project_key: BoardProjectKey = None,
) -> str:
    """List the active and future sprints of a board or of every board in a project.

    Args:
        ctx: The FastMCP context.
        board_id: Board ID.
        project_key: Project key.

    Returns:
        The sprints with dates, state and board.

    Raises:
        ValueError: If neither board_id nor project_key is given.
    """
    jira = await get_jira_fetcher(ctx)
    board_ids = jira.resolve_board_ids(board_id=board_id, project_key=project_key)
    return jira.format_sprint_list(jira.list_open_sprints(board_ids))


@jira_mcp.tool(tags={"jira", "read"})
async def get_sprint(
    ctx: Context,
    sprint_id: Annotated[str, Field(description="Sprint ID")],
) -> str:
    """Get the details of a sprint.

    Args:
        ctx: The FastMCP context.
        sprint_id: Sprint ID.

    Returns:
        Sprint name, state, dates, board and goal.
    """
    require_non_empty(sprint_id=sprint_id)
    jira = await get_jira_fetcher(ctx)
    return jira.format_sprint(jira.get_sprint(sprint_id))


@jira_mcp.tool(tags={"jira", "read"})
async def get_active_sprint(
    ctx: Context,
    board_id: BoardId = None,
    project_key: BoardProjectKey = None,
) -> str:
    """Get the active sprint of a board or of the first matching board of a project.

    Args:
        ctx: The FastMCP context.
        board_id: Board ID.
        project_key: Project key.

    Returns:
        The active sprint, or a message that there is none.
    """
    jira = await get_jira_fetcher(ctx)
    board_ids = jira.resolve_board_ids(board_id=board_id, project_key=project_key)
    return jira.format_active_sprint(jira.find_active_sprint(board_ids))


@jira_mcp.tool(tags={"jira", "read"})
async def sprint_report(
    ctx: Context,
    sprint_id: Annotated[str, Field(description="Sprint ID")],
) -> str:
    """Report on a sprint: total story points, bug count and a daily burndown.

    Args:
        ctx: The FastMCP context.
        sprint_id: Sprint ID.

    Returns:
        The sprint report.
    """
    require_non_empty(sprint_id=sprint_id)
    jira = await get_jira_fetcher(ctx)
    return jira.format_sprint_report(jira.get_sprint_report(sprint_id))


@jira_mcp.tool(tags={"jira", "read"})
async def list_statuses(
    ctx: Context, project_key: ProjectKey
) -> str:
    """List the statuses available in a project, grouped by issue type.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.

    Returns:
        The statuses per issue type.
    """
    require_non_empty(project_key=project_key)
    jira = await get_jira_fetcher(ctx)
    return jira.format_statuses(jira.get_project_statuses(project_key))


@jira_mcp.tool(tags={"jira", "read"})
async def get_version(
    ctx: Context,
    version_id: Annotated[str, Field(description="Version ID")],
) -> str:
    """Get the details of a project version (fix version).

    Args:
        ctx: The FastMCP context.
        version_id: Version ID.

    Returns:
        The version's name, description, release state and dates.
    """
    require_non_empty(version_id=version_id)
    jira = await get_jira_fetcher(ctx)
    return jira.format_version(jira.get_version(version_id))


@jira_mcp.tool(tags={"jira", "read"})
async def list_project_versions(
    ctx: Context, project_key: ProjectKey
) -> str:
    """List the versions of a project with their release status.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.

    Returns:
        The versions with status Released, Archived or In Development.
    """
    require_non_empty(project_key=project_key)
    jira = await get_jira_fetcher(ctx)
    return jira.format_project_versions(
        project_key, jira.get_project_versions(project_key)
    )


@jira_mcp.tool(tags={"jira", "read"})
async def download_attachment(
    ctx: Context,
    attachment_id: Annotated[str, Field(description="Attachment ID")],
) -> str:
    """Download a Jira attachment to a local temporary file.

    Args:
        ctx: The FastMCP context.
        attachment_id: Attachment ID.

    Returns:
        The local file path, filename, size and MIME type.
    """
    require_non_empty(attachment_id=attachment_id)
    jira = await get_jira_fetcher(ctx)
    path, attachment = jira.download_attachment(attachment_id)
    return jira.format_downloaded_attachment(
        str(path), attachment, path.stat().st_size
    )


@jira_mcp.tool(tags={"jira", "read"})
async def get_development_information(
    ctx: Context,
    issue_key: IssueKey,
    include_branches: Annotated[
        bool, Field(description="Include branches", default=False)
    ] = False,
    include_pull_requests: Annotated[
        bool, Field(description="Include pull requests", default=False)
    ] = False,
    include_commits: Annotated[
        bool,
        Field(
            description="Include repositories with their commits", default=False
        ),
    ] = False,
    include_builds: Annotated[
        bool, Field(description="Include CI/CD builds", default=False)
    ] = False,
) -> str:
    """Get the branches, pull requests, commits and builds linked to a Jira issue.

    When no include_* flag is set, every category is returned.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        include_branches: Include branches.
        include_pull_requests: Include pull requests.
        include_commits: Include repositories and commits.
        include_builds: Include builds.

    Returns:
        JSON string with issueKey, branches, pullRequests, repositories and builds.
    """
    require_non_empty(issue_key=issue_key)
    jira = await get_jira_fetcher(ctx)

    cancel_event = threading.Event()
    try:
        info = await asyncio.to_thread(
            jira.get_development_information,
            issue_key,
            include_branches=include_branches,
            include_pull_requests=include_pull_requests,
            include_commits=include_commits,
            include_builds=include_builds,
            cancel_event=cancel_event,
        )
    except asyncio.CancelledError:
        logger.debug(f"get_development_information for {issue_key} cancelled")
        cancel_event.set()
        raise

    return json.dumps(info.to_simplified_dict(), indent=2, ensure_ascii=False)
