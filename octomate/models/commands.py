"""Command payload models.

Each model is one variant of the closed ``Command`` union. The
``command_name`` tag is the key used in a step's ``runs`` list.
"""

from typing import Annotated, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

HEX_COLOR_PATTERN = r"^[0-9A-Fa-f]{6}$"

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class BaseCommand(BaseModel):
    """Common configuration for command payloads."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    command_name: ClassVar[str]


class CreateIssue(BaseCommand):
    """Open an issue in the target repository."""

    command_name: ClassVar[str] = "create-issue"

    title: NonEmptyStr = Field(description="Issue title")
    body: StrictStr = Field(description="Issue body (markdown)")
    milestone: StrictInt | None = Field(
        default=None,
        ge=1,
        description="Milestone number",
    )
    assignees: tuple[StrictStr, ...] = Field(
        default=(),
        description="Logins to assign",
    )
    labels: tuple[StrictStr, ...] = Field(
        default=(),
        description="Label names to apply",
    )


class CreateGist(BaseCommand):
    """Create a single-file gist owned by the authenticated user."""

    command_name: ClassVar[str] = "create-gist"

    title: NonEmptyStr = Field(description="Gist file name")
    content: StrictStr = Field(description="Gist file content")
    description: StrictStr | None = Field(
        default=None,
        description="Gist description",
    )
    public: StrictBool = Field(
        default=False,
        description="Whether the gist is public",
    )


class CreateTeam(BaseCommand):
    """Create a team in an organization."""

    command_name: ClassVar[str] = "create-team"

    name: NonEmptyStr = Field(description="Team name")
    owner: NonEmptyStr = Field(description="Owning organization (or 'me')")
    description: StrictStr | None = Field(
        default=None,
        description="Team description",
    )
    maintainers: tuple[StrictStr, ...] = Field(
        default=(),
        description="Logins of team maintainers",
    )


class CreateLabel(BaseCommand):
    """Create an issue label in the target repository."""

    command_name: ClassVar[str] = "create-label"

    name: NonEmptyStr = Field(description="Label name")
    color: StrictStr = Field(
        pattern=HEX_COLOR_PATTERN,
        description="Six hex digits, without a leading '#'",
    )
    description: StrictStr | None = Field(
        default=None,
        description="Label description",
    )


Command = Union[CreateIssue, CreateGist, CreateTeam, CreateLabel]

COMMAND_TYPES: dict[str, type[BaseCommand]] = {
    cls.command_name: cls for cls in (CreateIssue, CreateGist, CreateTeam, CreateLabel)
}
