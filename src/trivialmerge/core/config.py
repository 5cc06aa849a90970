"""Application state and configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from trivialmerge.core.base import BaseConfig, BaseState
from trivialmerge.core.log import Logger
from trivialmerge.core.result import FileReport
from trivialmerge.core.yaml_settings import (
    CONFIG_FILENAME,
    PackageDefaultsSettingsSource,
    YamlWithIncludesSettingsSource,
)

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class GitConfig(BaseConfig):
    """Git repository settings."""

    workdir: Path = Field(
        default=Path("."),
        description="Any directory inside the repository to resolve",
    )
    executable: str = Field(
        default="git",
        description="Git executable",
    )
    conflict_statuses: list[str] = Field(
        default_factory=lambda: ["UU"],
        description=(
            "Two-letter 'git status --porcelain' codes of files to "
            "resolve (UU = both modified)"
        ),
    )
    accepted_conflict_styles: list[str] = Field(
        default_factory=lambda: ["diff3", "zdiff3"],
        description=(
            "Values of merge.conflictstyle whose markers include the "
            "base section"
        ),
    )
    timeout: int = Field(
        default=60,
        description="Timeout for git commands in seconds",
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance"
    )
    git: GitConfig = Field(
        default_factory=GitConfig,
        description="Git repository settings"
    )
    editor: str | None = Field(
        default=None,
        description=(
            "Editor command for files left with conflicts; "
            "$EDITOR is used when unset"
        ),
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding of conflicted files",
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "trivialmerge"
        ),
        description="Root directory for log files",
    )
    run_name: str = Field(
        default="resolve",
        description="Subdirectory of log_root for this run's logs",
    )

    @model_validator(mode='after')
    def _setup_logger(self) -> Config:
        """Install the global logger from the loaded logger section."""
        from trivialmerge.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger()

        self.logger = setup_logger(
            log_root=self.log_root,
            run_name=self.run_name,
            level=self.logger.level,
            console=self.logger.console,
            file=self.logger.file,
            logfire=self.logger.logfire,
        )
        return self


# ============================================================
# RUNTIME STATE MODELS (mutable during workflow execution)
# ============================================================

class ResolveState(BaseState):
    """Resolve workflow runtime state."""

    repo: Any = Field(
        default=None,
        description="GitRepository for the working directory",
    )
    files: list[Path] = Field(
        default_factory=list,
        description="Conflicted files discovered in the repository",
    )
    reports: list[FileReport] = Field(
        default_factory=list,
        description="Per-file outcome, in processing order",
    )
    status: str = Field(
        default="pending",
        description="Workflow status: pending, running, complete, failed",
    )
    use_editor: bool = Field(
        default=False,
        description="Open the editor on files left with conflicts",
    )
    dump_diffs: bool = Field(
        default=False,
        description="Print side diffs of unresolved conflicts",
    )
    color: bool = Field(
        default=False,
        description="Color printed diffs",
    )
    set_conflict_style: bool = Field(
        default=False,
        description="Set merge.conflictstyle globally if needed",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def failed_files(self) -> list[Path]:
        return [report.path for report in self.reports if report.failed]


class Runtime(BaseModel):
    """Runtime state grouped by workflow."""

    resolve: ResolveState = Field(
        default_factory=ResolveState,
        description="Resolve workflow runtime state"
    )


# ============================================================
# STATE (config + runtime combined)
# ============================================================

class State(BaseSettings):
    """Configuration plus runtime state, passed through the workflow.

    - config: loaded from YAML/env/CLI and treated as read-only
    - runtime: filled in by the workflow nodes
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to deep-merge over the "
            "configuration, in order"
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_FILENAME,
        env_file=".env",
        env_prefix="TRIVIALMERGE_",
        env_nested_delimiter="__",
        cli_parse_args=True,
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore'
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init args, YAML files, .env, environment, secrets, then
        the package defaults."""
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
            PackageDefaultsSettingsSource(settings_cls),
        )

    def close(self):
        """Close the configured logger and its sinks."""
        self.config.close()


__all__ = ["State", "Config", "GitConfig", "FileReport", "BaseConfig",
           "BaseState"]
