"""Protocols for the installer's external collaborators.

The installer doesn't know how the knowledge store is implemented, how source
files are parsed, or how repositories are cloned. Apps provide these.
"""

from collections.abc import Hashable
from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

# Opaque handle returned by the knowledge store. None means "not found".
ComponentRef = Hashable

# Relation kind used to tag class membership (class -> instance)
MEMBERSHIP = "membership"

# Class node marking components eligible for installation
REUSABLE_COMPONENT_CLASS = "concept_reusable_component"


@runtime_checkable
class KnowledgeStoreProtocol(Protocol):
    """Narrow capability interface over a knowledge store.

    Every method may raise StoreQueryError when the underlying engine fails.
    """

    def find_by_identifier(self, identifier: str) -> ComponentRef | None:
        """Look up a node by its system identifier (None if not found)."""
        ...

    def exists(self, ref: ComponentRef | None) -> bool:
        """Check if ref is a valid node in the store."""
        ...

    def has_relation(self, predicate: str, subject: ComponentRef, obj: ComponentRef) -> bool:
        """Check if a relation of kind predicate connects subject to obj."""
        ...

    def get_identifier(self, ref: ComponentRef) -> str:
        """Get the system identifier of a node."""
        ...

    def get_link_content(self, ref: ComponentRef | None) -> str:
        """Get the content of a link node ("" if missing)."""
        ...

    def get_address(self, ref: ComponentRef) -> ComponentRef | None:
        """Get the link node holding the component's remote address."""
        ...

    def get_dependencies(self, ref: ComponentRef) -> list[ComponentRef]:
        """Get the component's dependencies in declared order."""
        ...

    def get_installation_method(self, ref: ComponentRef) -> ComponentRef | None:
        """Get the component's installation method node."""
        ...


@runtime_checkable
class SourceLoaderProtocol(Protocol):
    """Loads a staged source file into the knowledge store."""

    def load_source_file(self, path: Path) -> None:
        """Parse path and add its contents to the store.

        Raises:
            Exception: If the file cannot be loaded
        """
        ...


class RepositoryClonerProtocol(Protocol):
    """Protocol for fetching a component repository.

    Example implementations:
    - GitCloner: git clone via subprocess
    - Test doubles writing files directly
    """

    async def clone(self, address: str, target_dir: Path) -> str | None:
        """Clone the repository at address into target_dir.

        Args:
            address: Remote repository address
            target_dir: Existing, empty directory to clone into

        Returns:
            Commit SHA of the checkout, or None if unknown

        Raises:
            FetchError: If the clone fails or times out
        """
        ...
