"""Dependency resolver - install a component's dependencies before the component.

Dependencies are installed recursively through a callback into the installer.
The chain of identifiers currently being installed is carried through the
recursion; re-entering an identifier already on the chain raises
CyclicDependencyError.

Failure policy is fail-fast: the first dependency that fails aborts the
remaining ones. Dependencies installed before the failure stay installed.
"""

import logging
from collections.abc import Awaitable
from collections.abc import Callable

from .exceptions import ComponentError
from .exceptions import CyclicDependencyError
from .exceptions import DependencyInstallError
from .exceptions import StoreQueryError
from .protocols import ComponentRef
from .protocols import KnowledgeStoreProtocol

logger = logging.getLogger(__name__)

# (dependency identifier, chain of identifiers in progress) -> installed identifiers
InstallCallback = Callable[[str, tuple[str, ...]], Awaitable[list[str]]]


async def install_dependencies(
    store: KnowledgeStoreProtocol,
    ref: ComponentRef,
    install: InstallCallback,
    chain: tuple[str, ...],
) -> list[str]:
    """
    Install all dependencies of a component.

    Args:
        store: Knowledge store client
        ref: Component whose dependencies are installed
        install: Installs one dependency and returns the identifiers it installed
            (its own dependencies first, then itself)
        chain: Identifiers being installed, outermost first, ending with this component

    Returns:
        Installed dependency identifiers, dependencies before dependents

    Raises:
        StoreQueryError: If the dependency set can't be read (distinct from
            a component without dependencies)
        CyclicDependencyError: If a dependency is already on the chain
        DependencyInstallError: If a dependency fails to install
    """
    identifier = chain[-1]

    try:
        dependencies = store.get_dependencies(ref)
    except StoreQueryError as e:
        logger.error(f"Failed to read dependencies of '{identifier}': {e}")
        raise

    plan: list[str] = []
    for dependency in dependencies:
        try:
            dependency_id = store.get_identifier(dependency)
        except StoreQueryError as e:
            logger.error(f"Failed to read dependency identifier of '{identifier}': {e}")
            raise

        if dependency_id in chain:
            cycle = [*chain[chain.index(dependency_id) :], dependency_id]
            logger.error(f"Cyclic dependency: {' -> '.join(cycle)}")
            raise CyclicDependencyError(cycle, context={"identifier": identifier})

        logger.info(f"Installing dependency '{dependency_id}' of '{identifier}'")
        try:
            installed = await install(dependency_id, chain)
        except CyclicDependencyError:
            raise
        except ComponentError as e:
            logger.error(f"Dependency '{dependency_id}' is not installed")
            raise DependencyInstallError(
                f"Dependency '{dependency_id}' of '{identifier}' is not installed: {e.message}",
                context={"identifier": identifier, "dependency": dependency_id},
            ) from e

        plan.extend(item for item in installed if item not in plan)

    return plan
