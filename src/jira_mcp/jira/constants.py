"""Constants specific to Jira operations."""

# Expansions requested by get_issue / search_issue unless the caller overrides them.
DEFAULT_ISSUE_EXPAND = "transitions,changelog,subtasks,description"

SEARCH_MAX_RESULTS = 30
COMMENTS_MAX_RESULTS = 50
BOARDS_MAX_RESULTS = 50
SPRINTS_MAX_RESULTS = 50
SPRINT_REPORT_MAX_ISSUES = 50
MAX_ISSUES_PER_SPRINT_MOVE = 50

DEFAULT_CHILD_ISSUE_TYPE = "Subtask"
BUG_ISSUE_TYPE = "Bug"
BUG_LINK_HINT = (
    "A bug should be linked to a Story or Task. Next step should be to create "
    "relationship between the bug and the story or task."
)

# Sub-directory of the system temp dir receiving downloaded attachments.
ATTACHMENT_DOWNLOAD_DIR = "jira-mcp-attachments"
ATTACHMENT_CHUNK_SIZE = 8192

# Undocumented development status API
DEV_STATUS_SUMMARY_PATH = "rest/dev-status/latest/issue/summary"
DEV_STATUS_DETAIL_PATH = "rest/dev-status/latest/issue/detail"
ISSUE_LOOKUP_ENDPOINT = "/rest/api/2/issue/{issue_key}"

# Jira's default time-tracking units
SECONDS_PER_UNIT: dict[str, int] = {
    "w": 5 * 8 * 3600,
    "d": 8 * 3600,
    "h": 3600,
    "m": 60,
    "s": 1,
}
