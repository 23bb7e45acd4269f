"""In-memory knowledge store.

Reference implementation of KnowledgeStoreProtocol and SourceLoaderProtocol for
apps without a knowledge-representation engine, and for tests. Nodes are plain
integer handles.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .exceptions import StoreQueryError
from .protocols import MEMBERSHIP
from .protocols import REUSABLE_COMPONENT_CLASS

logger = logging.getLogger(__name__)


class InMemoryKnowledgeStore:
    """
    Dictionary-backed knowledge store.

    Methods named in failing_methods raise StoreQueryError, which lets callers
    exercise store failure handling.

    Example:
        >>> store = InMemoryKnowledgeStore()
        >>> store.add_component("part_ui", address="https://github.com/org/ui")
        >>> store.add_component("part_app", address="https://github.com/org/app", dependencies=["part_ui"])
    """

    def __init__(self):
        self._next_handle = 1
        self._handles: dict[str, int] = {}
        self._identifiers: dict[int, str] = {}
        self._links: dict[int, str] = {}
        self._relations: set[tuple[str, int, int]] = set()
        self._addresses: dict[int, int] = {}
        self._dependencies: dict[int, list[int]] = {}
        self._methods: dict[int, int] = {}
        self.loaded_sources: list[Path] = []
        self.failing_methods: set[str] = set()

    # Building the store

    def add_node(self, identifier: str) -> int:
        """Add a node (or return the existing one) for identifier."""
        if identifier in self._handles:
            return self._handles[identifier]

        handle = self._new_handle()
        self._handles[identifier] = handle
        self._identifiers[handle] = identifier
        return handle

    def add_component(
        self,
        identifier: str,
        *,
        address: str | None = None,
        reusable: bool = True,
        installation_method: str | None = "installation_method_default",
        dependencies: Iterable[str] = (),
    ) -> int:
        """Add a component node with its metadata.

        Args:
            identifier: Component system identifier
            address: Remote address stored in a link node (None for no address)
            reusable: Tag the component as a reusable component
            installation_method: Identifier of the installation method node (None for none)
            dependencies: Identifiers of dependency components (created if missing)

        Returns:
            Handle of the component node
        """
        handle = self.add_node(identifier)

        if reusable:
            reusable_class = self.add_node(REUSABLE_COMPONENT_CLASS)
            self._relations.add((MEMBERSHIP, reusable_class, handle))

        if address is not None:
            self.set_address(identifier, address)

        if installation_method is not None:
            self._methods[handle] = self.add_node(installation_method)

        for dependency in dependencies:
            self.add_dependency(identifier, dependency)

        return handle

    def set_address(self, identifier: str, address: str) -> None:
        """Attach a remote address link to a component."""
        link = self._new_handle()
        self._links[link] = address
        self._addresses[self.add_node(identifier)] = link

    def add_dependency(self, identifier: str, dependency: str) -> None:
        """Declare that identifier depends on dependency."""
        handle = self.add_node(identifier)
        self._dependencies.setdefault(handle, []).append(self.add_node(dependency))

    # KnowledgeStoreProtocol

    def find_by_identifier(self, identifier: str) -> int | None:
        self._check("find_by_identifier")
        return self._handles.get(identifier)

    def exists(self, ref) -> bool:
        self._check("exists")
        return ref is not None and (ref in self._identifiers or ref in self._links)

    def has_relation(self, predicate: str, subject, obj) -> bool:
        self._check("has_relation")
        return (predicate, subject, obj) in self._relations

    def get_identifier(self, ref) -> str:
        self._check("get_identifier")
        return self._identifiers.get(ref, "")

    def get_link_content(self, ref) -> str:
        self._check("get_link_content")
        return self._links.get(ref, "")

    def get_address(self, ref) -> int | None:
        self._check("get_address")
        return self._addresses.get(ref)

    def get_dependencies(self, ref) -> list[int]:
        self._check("get_dependencies")
        return list(self._dependencies.get(ref, []))

    def get_installation_method(self, ref) -> int | None:
        self._check("get_installation_method")
        return self._methods.get(ref)

    # SourceLoaderProtocol

    def load_source_file(self, path: Path) -> None:
        """Record a loaded source file."""
        self._check("load_source_file")
        logger.debug(f"Loaded source file: {path}")
        self.loaded_sources.append(path)

    def _new_handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    def _check(self, method: str) -> None:
        if method in self.failing_methods:
            raise StoreQueryError(f"Store query '{method}' failed", context={"method": method})
