"""Exceptions raised by pipelines-schema services."""


class PipelinesSchemaError(Exception):
    """Base exception for all pipelines-schema errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRemoteUrlError(PipelinesSchemaError):
    """Raised when a remote URL is not an Azure Repos URL."""

    def __init__(self, remote_url: str) -> None:
        super().__init__(f"Not an Azure Repos remote URL: {remote_url}")
        self.remote_url = remote_url


class GitCommandError(PipelinesSchemaError):
    """Raised when a git invocation fails."""

    def __init__(self, args: tuple[str, ...], returncode: int, stderr: str = "") -> None:
        super().__init__(f"git {' '.join(args)} exited with {returncode}: {stderr.strip()}")
        self.args_ = args
        self.returncode = returncode
        self.stderr = stderr


class WorkspaceStateError(PipelinesSchemaError):
    """Raised when workspace state cannot be read or written."""


class SchemaFetchError(PipelinesSchemaError):
    """Raised when an organization schema cannot be retrieved or saved."""

    def __init__(self, organization: str, cause: BaseException) -> None:
        super().__init__(f"Failed to fetch schema for organization {organization}: {cause}")
        self.organization = organization
        self.cause = cause
