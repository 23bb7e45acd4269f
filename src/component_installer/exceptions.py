"""Component installer exceptions.

Every exception carries a human-readable message plus a context dict so callers
can report failures without parsing log text.
"""

from .schema import FailureReason


class ComponentError(Exception):
    """Base exception for component operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (identifiers, paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreQueryError(ComponentError):
    """Knowledge store query failed."""


class ComponentValidationError(ComponentError):
    """Component is not installable."""

    def __init__(self, message: str, reason: FailureReason, context: dict | None = None):
        super().__init__(message, context)
        self.reason = reason


class CyclicDependencyError(ComponentError):
    """Dependency graph contains a cycle."""

    def __init__(self, cycle: list[str], context: dict | None = None):
        super().__init__(f"Cyclic dependency detected: {' -> '.join(cycle)}", context)
        self.cycle = cycle


class DependencyInstallError(ComponentError):
    """A dependency of the component could not be installed."""


class FetchError(ComponentError):
    """Component sources could not be staged or cloned."""


class LoadError(ComponentError):
    """Component source file could not be loaded into the store."""
