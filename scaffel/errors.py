# scaffel/errors.py
"""
Exception types raised by scaffel.

Core components raise these; only the CLI layer turns them into
printed error lists and exit codes.
"""


class ScaffelError(Exception):
    """Base error carrying a stable machine-readable code."""

    def __init__(self, message: str, code: str = "SCAFFEL_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(ScaffelError):
    """
    Malformed or contradictory input.

    Always carries the complete list of violations so callers can
    report everything in one pass.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.errors = list(errors or [])


class UnknownDependencyError(ValidationError):
    """A feature references a dependency id that is not in the batch."""

    def __init__(self, feature_id: str, dependency_id: str) -> None:
        message = f'Feature "{feature_id}" depends on non-existent feature "{dependency_id}"'
        super().__init__(message, [message])
        self.feature_id = feature_id
        self.dependency_id = dependency_id


class ConfigurationError(ScaffelError):
    """Invalid settings or project configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")


class KnowledgeBaseError(ScaffelError):
    """Knowledge data could not be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "KNOWLEDGE_BASE_ERROR")


class FileSystemError(ScaffelError):
    """A path could not be read, created or written."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message, "FILE_SYSTEM_ERROR")
        self.path = path
