"""Base model shared by all server records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WrenModel(BaseModel):
    """Server record with camelCase wire names.

    Unknown fields are ignored so newer servers stay compatible.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
