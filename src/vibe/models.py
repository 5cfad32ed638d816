"""Pydantic models for vibe configuration and input data."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectRepoConfig(BaseModel):
    """Per-repository settings for a multi-repository project.

    Attributes:
        default_target: Base branch for new task branches (``defaultTarget``).
        setup_command: Shell command run inside each new worktree
            (``setupCommand``).
        copy_files: Extra files or glob patterns copied from the checkout
            into each new worktree (``copyFiles``).

    Example:
        >>> config = ProjectRepoConfig.model_validate(
        ...     {"defaultTarget": "develop", "copyFiles": ".env.local"}
        ... )
        >>> config.default_target, config.setup_command, config.copy_files
        ('develop', None, ['.env.local'])
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    default_target: str | None = Field(default=None, alias="defaultTarget")
    setup_command: str | None = Field(default=None, alias="setupCommand")
    copy_files: list[str] = Field(default_factory=list, alias="copyFiles")

    @field_validator("default_target", "setup_command", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value

    @field_validator("copy_files", mode="before")
    @classmethod
    def normalize_copy_files(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class ProjectConfig(BaseModel):
    """Contents of a ``.vibe-project.json`` file.

    Keys of ``repos`` are ``ghq`` repository identifiers such as
    ``github.com/org/repo``.

    Example:
        >>> config = ProjectConfig.model_validate(
        ...     {"repos": {"github.com/org/api": {"setupCommand": "make"}}}
        ... )
        >>> config.repos["github.com/org/api"].setup_command
        'make'
    """

    model_config = ConfigDict(extra="allow")

    repos: dict[str, ProjectRepoConfig] = Field(default_factory=dict)

    @field_validator("repos", mode="before")
    @classmethod
    def normalize_repos(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: (item or {}) for key, item in value.items()}
        return value


class StatusModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    display_name: str | None = None


class StatusWorkspace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current_dir: str | None = None


class StatusContextWindow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    used_percentage: float | None = None


class StatusInput(BaseModel):
    """JSON payload the agent pipes into ``vibe statusline``."""

    model_config = ConfigDict(extra="ignore")

    model: StatusModel = Field(default_factory=StatusModel)
    workspace: StatusWorkspace = Field(default_factory=StatusWorkspace)
    context_window: StatusContextWindow = Field(default_factory=StatusContextWindow)

    @field_validator("model", "workspace", "context_window", mode="before")
    @classmethod
    def normalize_sections(cls, value: object) -> object:
        return {} if value is None else value
