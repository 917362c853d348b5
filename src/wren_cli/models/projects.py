"""Project and identity models."""

from pydantic import Field

from wren_cli.models.base import WrenModel


class Project(WrenModel):
    """A project on the server."""

    id: int
    display_name: str = ""
    type: str | None = Field(default=None, description="Data source type")
    language: str | None = None
    timezone: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class WhoAmI(WrenModel):
    """Identity behind the configured API key."""

    endpoint: str = ""
    user_email: str = "(authenticated via API key)"
    user_name: str | None = None
    org_name: str | None = None
    org_id: int | None = None
    role: str | None = None
    project_count: int = 0
    project_names: list[str] = Field(default_factory=list)
