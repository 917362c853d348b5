"""API key and API history models."""

from typing import Any

from pydantic import Field

from wren_cli.models.base import WrenModel


class ApiKey(WrenModel):
    """An organization-scoped API key. The secret itself is never listed."""

    id: int
    name: str = ""
    secret_key_masked: str = ""
    last_used_at: str | None = None
    expires_at: str | None = None
    created_by_email: str | None = None
    created_at: str = ""
    revoked_at: str | None = None

    @property
    def status(self) -> str:
        return "revoked" if self.revoked_at else "active"


class ProjectApiKey(ApiKey):
    """An API key restricted to a single project."""

    project_id: int = 0
    organization_id: int | None = None
    permissions: list[str] | None = None
    created_by: int | None = None


class CreatedApiKey(WrenModel):
    """A freshly created key together with its one-time secret."""

    key: ApiKey
    secret_key: str


class CreatedProjectApiKey(WrenModel):
    key: ProjectApiKey
    secret_key: str


class ApiHistoryItem(WrenModel):
    """A logged API call."""

    id: str
    project_id: int | None = None
    api_type: str = ""
    thread_id: str | None = None
    status_code: int | None = None
    duration_ms: int | None = None
    request_payload: Any = None
    response_payload: Any = None
    created_at: str = ""


class ApiHistoryPage(WrenModel):
    items: list[ApiHistoryItem] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


class ApiHistoryFilter(WrenModel):
    """Filters for API history; empty fields are not sent."""

    api_type: str | None = None
    status_code: int | None = None
    thread_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None

    def to_variables(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in self.model_dump(by_alias=True, exclude_none=True).items()
            if value not in ("", 0)
        }
