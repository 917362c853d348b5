"""Conversation thread models."""

from pydantic import Field

from wren_cli.models.base import WrenModel


class Thread(WrenModel):
    id: int
    summary: str = ""


class ThreadResponse(WrenModel):
    """One question asked inside a thread."""

    id: int
    thread_id: int
    question: str = ""
    sql: str | None = None


class DetailedThread(WrenModel):
    id: int
    responses: list[ThreadResponse] = Field(default_factory=list)
