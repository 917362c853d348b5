"""Knowledge base operations over REST: instructions and SQL pairs."""

from wren_cli.core.exceptions import NotFoundError
from wren_cli.models import (
    Instruction,
    InstructionCreate,
    InstructionUpdate,
    SqlPair,
    SqlPairCreate,
    SqlPairUpdate,
)
from wren_cli.services.base import BaseService, parse_as

INSTRUCTIONS_PATH = "/api/v1/knowledge/instructions"
SQL_PAIRS_PATH = "/api/v1/knowledge/sql_pairs"


class KnowledgeService(BaseService):
    """Instructions and SQL pairs that steer SQL generation."""

    def list_instructions(self) -> list[Instruction]:
        data = self._transport.get_json(INSTRUCTIONS_PATH) or []
        return parse_as(list[Instruction], data, "instructions")

    def create_instruction(self, request: InstructionCreate) -> Instruction:
        payload = request.model_dump(by_alias=True)
        data = self._transport.post_json(INSTRUCTIONS_PATH, payload)
        return parse_as(Instruction, data, "instruction")

    def update_instruction(self, instruction_id: int, request: InstructionUpdate) -> Instruction:
        payload = request.model_dump(by_alias=True, exclude_none=True)
        data = self._transport.put_json(f"{INSTRUCTIONS_PATH}/{instruction_id}", payload)
        return parse_as(Instruction, data, "instruction")

    def delete_instruction(self, instruction_id: int) -> None:
        self._transport.delete(f"{INSTRUCTIONS_PATH}/{instruction_id}")

    def list_sql_pairs(self) -> list[SqlPair]:
        data = self._transport.get_json(SQL_PAIRS_PATH) or []
        return parse_as(list[SqlPair], data, "SQL pairs")

    def get_sql_pair(self, pair_id: int) -> SqlPair:
        """Find one SQL pair. The server has no lookup by ID, so the list is scanned."""
        for pair in self.list_sql_pairs():
            if pair.id == pair_id:
                return pair
        raise NotFoundError(f"SQL pair {pair_id} not found")

    def create_sql_pair(self, request: SqlPairCreate) -> SqlPair:
        data = self._transport.post_json(SQL_PAIRS_PATH, request.model_dump(by_alias=True))
        return parse_as(SqlPair, data, "SQL pair")

    def update_sql_pair(self, pair_id: int, request: SqlPairUpdate) -> SqlPair:
        payload = request.model_dump(by_alias=True, exclude_none=True)
        data = self._transport.put_json(f"{SQL_PAIRS_PATH}/{pair_id}", payload)
        return parse_as(SqlPair, data, "SQL pair")

    def delete_sql_pair(self, pair_id: int) -> None:
        self._transport.delete(f"{SQL_PAIRS_PATH}/{pair_id}")
