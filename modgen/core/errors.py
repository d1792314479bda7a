"""
MODGEN Core - Exceptions

Every error raised by the generator carries an actionable suggestion and an
error code, so the CLI can print a helpful message without knowing where the
failure came from.
"""

from typing import Optional


class ModgenError(Exception):
    """
    Base exception for generator errors.

    Attributes:
        message: Error message
        suggestion: Actionable suggestion for the user
        error_code: Optional error code for documentation reference
    """

    def __init__(self, message: str, suggestion: Optional[str] = None, error_code: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        super().__init__(message)


class InvalidIdentifierError(ModgenError):
    """Raised when a collection identifier has no recognised prefix."""

    def __init__(self, identifier: str, message: Optional[str] = None):
        from .naming import KNOWN_PREFIXES

        self.identifier = identifier
        super().__init__(
            message or f"Invalid collection name '{identifier}': must start with a known prefix",
            suggestion=f"Rename the collection to start with one of: {', '.join(KNOWN_PREFIXES)}",
            error_code="N001",
        )


class MarkerNotFoundError(ModgenError):
    """Raised when the registry file does not contain the expected declaration."""

    def __init__(self, registry_path, marker: str, detail: Optional[str] = None):
        self.registry_path = registry_path
        self.marker = marker
        message = f"Registry marker '{marker}' not found in {registry_path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(
            message,
            suggestion=f"Make sure the file declares '{marker} = [...]' with a flat list of modules.",
            error_code="R001",
        )


class DuplicateBindingError(ModgenError):
    """Raised when a module symbol is already registered from another path."""

    def __init__(self, registry_path, binding_name: str, import_line: str):
        self.registry_path = registry_path
        self.binding_name = binding_name
        super().__init__(
            f"{binding_name} is already registered in {registry_path} from a different path",
            suggestion=f"Remove the existing {binding_name} entry or rename the collection. "
                       f"Expected: {import_line}",
            error_code="R002",
        )


class SchemaError(ModgenError):
    """Raised when the models description cannot be read or has the wrong shape."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(
            message,
            suggestion=suggestion or "Models must be a list of {folder: [{collection: {field: type}}]} groups.",
            error_code="S001",
        )


class GenerationError(ModgenError):
    """
    Raised when generating a module fails.

    The original exception is chained as ``__cause__``.

    Attributes:
        collection_name: Raw collection identifier of the failing module
        step: Step that failed (render, materialize, register)
    """

    def __init__(self, collection_name: str, step: str, cause: BaseException):
        self.collection_name = collection_name
        self.step = step
        suggestion = getattr(cause, "suggestion", None)
        if suggestion is None and isinstance(cause, OSError):
            suggestion = "Check file permissions and disk space, then run the generator again."
        super().__init__(
            f"Module '{collection_name}' failed during {step}: {cause}",
            suggestion=suggestion,
            error_code=getattr(cause, "error_code", None) or "G001",
        )


__all__ = [
    "ModgenError",
    "InvalidIdentifierError",
    "MarkerNotFoundError",
    "DuplicateBindingError",
    "SchemaError",
    "GenerationError",
]
