"""
Constants and default values for model conversions.

Centralizes the fallbacks used when a Jira payload is missing a value so
that text output and JSON output agree.
"""

#
# Common defaults
#
EMPTY_STRING = ""
UNKNOWN = "Unknown"
UNASSIGNED = "Unassigned"
NONE_VALUE = "None"
EMPTY_HISTORY_VALUE = "(empty)"

#
# Jira defaults
#
JIRA_DEFAULT_ID = "0"
JIRA_DEFAULT_KEY = "UNKNOWN-0"

# Changelog field carrying the team-managed story point estimate
STORY_POINT_FIELD = "Story point estimate"

# Status names treated as finished work in sprint reports
DONE_STATUS_NAMES = ("Done", "Closed", "Resolved")

#
# Development information
#
DEV_STATUS_DATA_TYPES = ("repository", "branch", "pullrequest", "build")
DEV_STATUS_NOT_FOUND_ERROR = "Dev-status API endpoint not found"
DEV_STATUS_NO_INTEGRATIONS_MESSAGE = "No development integrations found"
