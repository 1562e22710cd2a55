"""
Development status models.

These mirror the payloads of the undocumented ``/rest/dev-status`` API:
branches, pull requests, repositories (with nested commits) and CI builds
reported by connected VCS and CI integrations. The API is unstable, so
every model keeps unknown keys and serializes back with the camelCase
names Jira used.
"""

from typing import Any, get_origin

from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..base import ApiModel
from ..constants import DEV_STATUS_NOT_FOUND_ERROR, DEV_STATUS_NO_INTEGRATIONS_MESSAGE


class DevStatusModel(ApiModel):
    """Base for dev-status payload models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_list_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # Jira sends null for empty collections
        if value is None and info.field_name is not None:
            field = cls.model_fields.get(info.field_name)
            if field is not None and get_origin(field.annotation) is list:
                return []
        return value

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any):
        """
        Validate a raw payload.

        Raises:
            pydantic.ValidationError: If the payload does not have the
                expected shape
        """
        return cls.model_validate(data)

    def to_simplified_dict(self) -> dict[str, Any]:
        """Dump only the keys Jira sent, under their original names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class DevAuthor(DevStatusModel):
    name: str | None = None
    email: str | None = None
    avatar: str | None = None


class DevRepositoryRef(DevStatusModel):
    id: str | None = None
    name: str | None = None
    url: str | None = None


class DevCommitFile(DevStatusModel):
    path: str | None = None
    url: str | None = None
    change_type: str | None = None
    lines_added: int | None = None
    lines_removed: int | None = None


class DevCommit(DevStatusModel):
    id: str | None = None
    display_id: str | None = None
    message: str | None = None
    author: DevAuthor | None = None
    author_timestamp: str | None = None
    url: str | None = None
    file_count: int | None = None
    merge: bool | None = None
    files: list[DevCommitFile] = Field(default_factory=list)


class DevBranch(DevStatusModel):
    name: str | None = None
    url: str | None = None
    create_pull_request_url: str | None = None
    repository: DevRepositoryRef | None = None
    last_commit: DevCommit | None = None


class DevBranchRef(DevStatusModel):
    branch: str | None = None
    url: str | None = None


class DevReviewer(DevStatusModel):
    name: str | None = None
    avatar: str | None = None
    approved: bool | None = None


class DevPullRequest(DevStatusModel):
    """A pull/merge request; ``status`` is OPEN, MERGED, DECLINED or CLOSED."""

    id: str | None = None
    name: str | None = None
    url: str | None = None
    status: str | None = None
    author: DevAuthor | None = None
    last_update: str | None = None
    source: DevBranchRef | None = None
    destination: DevBranchRef | None = None
    comment_count: int | None = None
    reviewers: list[DevReviewer] = Field(default_factory=list)
    repository_id: str | None = None
    repository_name: str | None = None
    repository_url: str | None = None


class DevRepository(DevStatusModel):
    id: str | None = None
    name: str | None = None
    url: str | None = None
    avatar: str | None = None
    commits: list[DevCommit] = Field(default_factory=list)


class DevBuildTestSummary(DevStatusModel):
    total_number: int | None = None
    number_passed: int | None = None
    success_number: int | None = None
    number_failed: int | None = None
    failed_number: int | None = None
    skipped_number: int | None = None


class DevBuildCommitRef(DevStatusModel):
    id: str | None = None
    display_id: str | None = None
    repository_uri: str | None = None


class DevBuildRefInfo(DevStatusModel):
    name: str | None = None
    uri: str | None = None


class DevBuildReference(DevStatusModel):
    commit: DevBuildCommitRef | None = None
    ref: DevBuildRefInfo | None = None


class DevBuild(DevStatusModel):
    """A CI/CD build; ``state`` is e.g. successful, failed or in_progress."""

    id: str | None = None
    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    url: str | None = None
    state: str | None = None
    created_at: str | None = None
    last_updated: str | None = None
    # providers send either a counter or a label
    build_number: int | str | None = None
    test_info: DevBuildTestSummary | None = None
    test_summary: DevBuildTestSummary | None = None
    references: list[DevBuildReference] = Field(default_factory=list)
    pipeline_id: str | None = None
    pipeline_name: str | None = None
    provider_id: str | None = None
    provider_type: str | None = None
    provider_ari: str | None = None
    repository_id: str | None = None
    repository_name: str | None = None
    repository_url: str | None = None


class DevBuildProvider(DevStatusModel):
    id: str | None = None
    name: str | None = None
    home_url: str | None = None
    logo_url: str | None = None
    documentation_url: str | None = None


class DevJswddBuildsData(DevStatusModel):
    """Builds reported by cloud CI providers through the builds API."""

    builds: list[DevBuild] = Field(default_factory=list)
    providers: list[DevBuildProvider] = Field(default_factory=list)


class DevStatusDetail(DevStatusModel):
    """The artifacts one integration reports for one data type."""

    branches: list[DevBranch] = Field(default_factory=list)
    pull_requests: list[DevPullRequest] = Field(default_factory=list)
    repositories: list[DevRepository] = Field(default_factory=list)
    builds: list[DevBuild] = Field(default_factory=list)
    jswdd_builds_data: list[DevJswddBuildsData] = Field(default_factory=list)

    @property
    def all_builds(self) -> list[DevBuild]:
        """Top-level builds followed by those nested in ``jswddBuildsData``."""
        nested = [build for data in self.jswdd_builds_data for build in data.builds]
        return [*self.builds, *nested]


class DevStatusResponse(DevStatusModel):
    """Body of ``GET /rest/dev-status/latest/issue/detail``."""

    errors: list[Any] = Field(default_factory=list)
    detail: list[DevStatusDetail] = Field(default_factory=list)


class DevelopmentInformation(ApiModel):
    """
    Merged development information for one issue.

    Always serializes to the same shape: the four categories are present
    as lists (never null), plus ``error`` or ``message`` for the soft
    outcomes.
    """

    issue_key: str
    branches: list[DevBranch] = Field(default_factory=list)
    pull_requests: list[DevPullRequest] = Field(default_factory=list)
    repositories: list[DevRepository] = Field(default_factory=list)
    builds: list[DevBuild] = Field(default_factory=list)
    error: str | None = None
    message: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "DevelopmentInformation":
        return cls.model_validate(data)

    @classmethod
    def endpoint_not_found(cls, issue_key: str) -> "DevelopmentInformation":
        return cls(issue_key=issue_key, error=DEV_STATUS_NOT_FOUND_ERROR)

    @classmethod
    def no_integrations(cls, issue_key: str) -> "DevelopmentInformation":
        return cls(issue_key=issue_key, message=DEV_STATUS_NO_INTEGRATIONS_MESSAGE)

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"issueKey": self.issue_key}
        if self.error is not None:
            result["error"] = self.error
        if self.message is not None:
            result["message"] = self.message
        result["branches"] = [branch.to_simplified_dict() for branch in self.branches]
        result["pullRequests"] = [pr.to_simplified_dict() for pr in self.pull_requests]
        result["repositories"] = [
            repository.to_simplified_dict() for repository in self.repositories
        ]
        result["builds"] = [build.to_simplified_dict() for build in self.builds]
        return result
