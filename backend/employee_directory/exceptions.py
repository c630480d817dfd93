"""Exceptions raised across the employee directory."""


class DirectoryError(Exception):
    """Base class for errors whose message is safe to show to API clients."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(DirectoryError):
    """Required configuration is missing or invalid."""


class InvalidIdentifier(DirectoryError):
    """A record id could not be parsed."""

    def __init__(self, value: object) -> None:
        super().__init__(f'Cast to id failed for value "{value}"')
        self.value = value


class ConstraintViolation(DirectoryError):
    """The store rejected a write because a constraint failed."""


class OperationError(DirectoryError):
    """A failed operation surfaced to the caller as a raised error."""


class UnknownOperation(DirectoryError):
    """The client asked for an operation the API does not expose."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Cannot query field "{name}": unknown operation.')
        self.name = name
