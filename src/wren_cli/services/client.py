"""Client facade grouping all domain services over one transport."""

import httpx

from wren_cli.config import CLIConfig
from wren_cli.services.auth import AuthService
from wren_cli.services.keys import KeyService
from wren_cli.services.knowledge import KnowledgeService
from wren_cli.services.modeling import ModelingService
from wren_cli.services.projects import ProjectService
from wren_cli.services.queries import QueryService
from wren_cli.services.threads import ThreadService
from wren_cli.services.transport import WrenTransport


class WrenClient:
    """Entry point to every server operation.

    Example:
        with WrenClient.from_config(CLIConfig.load()) as client:
            for project in client.projects.list_projects():
                print(project.display_name)
    """

    def __init__(self, transport: WrenTransport) -> None:
        self.transport = transport
        self.projects = ProjectService(transport)
        self.modeling = ModelingService(transport)
        self.knowledge = KnowledgeService(transport)
        self.threads = ThreadService(transport)
        self.keys = KeyService(transport)
        self.queries = QueryService(transport)
        self.auth = AuthService(transport)

    @classmethod
    def from_config(
        cls,
        config: CLIConfig,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "WrenClient":
        """Build a client; fails when the endpoint or API key is missing."""
        return cls(WrenTransport.from_config(config, timeout=timeout, transport=transport))

    def __enter__(self) -> "WrenClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()
