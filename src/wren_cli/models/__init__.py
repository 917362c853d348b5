"""Pydantic models for server records and requests."""

from wren_cli.models.api_keys import (
    ApiHistoryFilter,
    ApiHistoryItem,
    ApiHistoryPage,
    ApiKey,
    CreatedApiKey,
    CreatedProjectApiKey,
    ProjectApiKey,
)
from wren_cli.models.base import WrenModel
from wren_cli.models.knowledge import (
    Instruction,
    InstructionCreate,
    InstructionUpdate,
    SqlPair,
    SqlPairCreate,
    SqlPairUpdate,
)
from wren_cli.models.projects import Project, WhoAmI
from wren_cli.models.query import (
    AskRequest,
    AskResult,
    ChartRequest,
    ChartResult,
    GenerateSQLRequest,
    GenerateSQLResult,
    RunSQLColumn,
    RunSQLRequest,
    RunSQLResult,
    SummaryRequest,
    SummaryResult,
)
from wren_cli.models.semantic import (
    CalcFieldValidation,
    CalculatedField,
    DeployedMDL,
    DeployResult,
    DetailedColumn,
    DetailedModel,
    DetailedRelation,
    Field,
    FieldSummary,
    Model,
    Relation,
    View,
)
from wren_cli.models.threads import DetailedThread, Thread, ThreadResponse

__all__ = [
    "WrenModel",
    "Project",
    "WhoAmI",
    "Model",
    "Field",
    "FieldSummary",
    "CalculatedField",
    "DetailedModel",
    "DetailedColumn",
    "DetailedRelation",
    "View",
    "Relation",
    "CalcFieldValidation",
    "DeployResult",
    "DeployedMDL",
    "Instruction",
    "InstructionCreate",
    "InstructionUpdate",
    "SqlPair",
    "SqlPairCreate",
    "SqlPairUpdate",
    "Thread",
    "ThreadResponse",
    "DetailedThread",
    "ApiKey",
    "ProjectApiKey",
    "CreatedApiKey",
    "CreatedProjectApiKey",
    "ApiHistoryItem",
    "ApiHistoryPage",
    "ApiHistoryFilter",
    "AskRequest",
    "AskResult",
    "GenerateSQLRequest",
    "GenerateSQLResult",
    "RunSQLRequest",
    "RunSQLResult",
    "RunSQLColumn",
    "SummaryRequest",
    "SummaryResult",
    "ChartRequest",
    "ChartResult",
]
