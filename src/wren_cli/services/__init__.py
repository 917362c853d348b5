"""Services module."""

from wren_cli.services.client import WrenClient
from wren_cli.services.transport import WrenTransport

__all__ = ["WrenClient", "WrenTransport"]
