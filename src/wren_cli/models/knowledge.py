"""Knowledge base models: instructions and SQL pairs."""

from pydantic import Field

from wren_cli.models.base import WrenModel


class Instruction(WrenModel):
    """A free-text instruction given to the SQL generator."""

    id: int
    instruction: str = ""
    questions: list[str] = Field(default_factory=list)
    is_global: bool = False


class InstructionCreate(WrenModel):
    instruction: str
    questions: list[str] = Field(default_factory=list)
    is_global: bool = False


class InstructionUpdate(WrenModel):
    """Partial update; unset fields are not sent."""

    instruction: str | None = None
    questions: list[str] | None = None
    is_global: bool | None = None


class SqlPair(WrenModel):
    """A question with its reference SQL."""

    id: int
    project_id: int | None = None
    sql: str = ""
    question: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class SqlPairCreate(WrenModel):
    sql: str
    question: str


class SqlPairUpdate(WrenModel):
    """Partial update; unset fields are not sent."""

    sql: str | None = None
    question: str | None = None
