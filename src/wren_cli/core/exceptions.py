"""Custom exceptions for the wren CLI."""


class WrenError(Exception):
    """Base exception for wren CLI errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(WrenError):
    """Raised when the CLI configuration is missing, unreadable, or invalid."""

    pass


class NoProjectError(ConfigError):
    """Raised when a command needs an active project and none is selected."""

    def __init__(self, message: str = "no project selected. Run: wren project use <id>"):
        super().__init__(message)


class InputValidationError(WrenError):
    """Raised when command arguments are malformed, before any request is sent."""

    def __init__(self, message: str, value: str | None = None):
        super().__init__(message, {"value": value})
        self.value = value


class TransportError(WrenError):
    """Raised when an HTTP request fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message, {"status_code": status_code, "body": body})
        self.status_code = status_code
        self.body = body


class GraphQLError(WrenError):
    """Raised when a GraphQL response carries an errors array."""

    def __init__(self, messages: list[str]):
        super().__init__(f"GraphQL errors: {'; '.join(messages)}", {"messages": messages})
        self.messages = messages


class DomainError(WrenError):
    """Raised when the server reports a failure inside a decoded payload."""

    def __init__(self, code: str, message: str):
        super().__init__(f"[{code}] {message}", {"code": code, "error": message})
        self.code = code
        self.error = message


class NotFoundError(WrenError):
    """Raised when a client-side lookup finds no matching record."""

    pass
