from pathlib import Path
from typing import ClassVar, Self

from pydantic import DirectoryPath, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChangelogSettings(BaseSettings):
    CHANGELOG_FILENAME: ClassVar[str] = "CHANGELOG.md"
    DEFAULT_TAG_PREFIX: ClassVar[str] = "v"
    model_config = SettingsConfigDict(env_prefix="TAG_CHANGELOG_")

    repo_path: DirectoryPath
    from_ref: str | None = Field(
        default=None,
        description="Tag or commit to start from (exclusive). Defaults to the latest version tag reachable from `to_ref`, or the root commit.",
    )
    to_ref: str = "HEAD"
    tag_prefix: str = DEFAULT_TAG_PREFIX
    remote_name: str = "origin"
    use_emoji: bool = True
    lookup_handles: bool = Field(
        default=True,
        description="Use the GitHub cli to look up handles of commit authors by email.",
    )
    use_remote_history: bool = Field(
        default=True,
        description="Read commit author logins from the GitHub commit history before any handle lookup.",
    )
    is_bot: bool = False

    @model_validator(mode="after")
    def check_refs(self) -> Self:
        if self.from_ref is not None and not self.from_ref.strip():
            self.from_ref = None
        assert self.to_ref.strip(), "to_ref must not be empty"
        return self

    @property
    def changelog_md(self) -> Path:
        return self.repo_path / self.CHANGELOG_FILENAME


def changelog_settings(
    repo_path: Path,
    *,
    from_ref: str | None = None,
    to_ref: str | None = None,
    tag_prefix: str | None = None,
    remote_name: str | None = None,
    is_bot: bool = False,
) -> ChangelogSettings:
    # CLI arg → Env var → Default, only explicit args are passed on
    explicit = {
        "from_ref": from_ref,
        "to_ref": to_ref,
        "tag_prefix": tag_prefix,
        "remote_name": remote_name,
    }
    kwargs = {key: value for key, value in explicit.items() if value is not None}
    if is_bot:
        kwargs["is_bot"] = True
    return ChangelogSettings(repo_path=repo_path, **kwargs)
