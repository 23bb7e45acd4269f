"""Component installation orchestrator.

For every requested identifier:
1. Resolve the identifier to a component in the knowledge store
2. Validate the component's metadata
3. Install its dependencies (recursively, dependencies first)
4. Fetch its sources and load them into the store

Installing the component's own installation method is not supported.

Requests are fail-partial: a component that fails is recorded in the result
and the next requested identifier is processed.
"""

import logging
from collections.abc import Mapping

from .config import InstallerConfig
from .exceptions import ComponentError
from .exceptions import ComponentValidationError
from .exceptions import CyclicDependencyError
from .exceptions import DependencyInstallError
from .exceptions import FetchError
from .exceptions import LoadError
from .exceptions import StoreQueryError
from .fetcher import ArtifactFetcher
from .lock import InstallLock
from .protocols import KnowledgeStoreProtocol
from .protocols import RepositoryClonerProtocol
from .protocols import SourceLoaderProtocol
from .resolver import install_dependencies
from .schema import ComponentFailure
from .schema import FailureReason
from .schema import InstallResult
from .schema import InstallStatus
from .validator import check_component

logger = logging.getLogger(__name__)

# Request parameter holding the identifiers to install
PARAMETER_NAME = "components"


class ComponentInstaller:
    """
    Install components described in a knowledge store.

    Apps inject the store, config and loader (and optionally cloner and lock).

    Example:
        >>> installer = ComponentInstaller(
        ...     store=store,
        ...     config=InstallerConfig(staging_root=Path("specifications")),
        ...     loader=loader,
        ... )
        >>> result = await installer.execute({"components": ["part_ui"]})
        >>> print(result.status, result.plan)
    """

    def __init__(
        self,
        store: KnowledgeStoreProtocol,
        config: InstallerConfig,
        loader: SourceLoaderProtocol,
        cloner: RepositoryClonerProtocol | None = None,
        lock: InstallLock | None = None,
    ):
        """Initialize installer.

        Args:
            store: Knowledge store client
            config: Installer config
            loader: Loads staged source files into the store
            cloner: Repository cloner (defaults to GitCloner)
            lock: Lock file manager (defaults to config.lock_path if set)
        """
        if lock is None and config.lock_path is not None:
            lock = InstallLock(lock_path=config.lock_path)

        self.store = store
        self.config = config
        self.lock = lock
        self.fetcher = ArtifactFetcher(config=config, loader=loader, cloner=cloner, lock=lock)

    async def execute(self, parameters: Mapping[str, list[str]]) -> InstallResult:
        """
        Install the components named in parameters.

        Args:
            parameters: Request parameters; PARAMETER_NAME lists identifiers to install

        Returns:
            InstallResult with installed dependency plan, installed identifiers and failures
        """
        requested = parameters.get(PARAMETER_NAME)
        if requested is None:
            logger.info("No identifier provided, installing all components is not supported")
            return InstallResult(status=InstallStatus.NOT_IMPLEMENTED)

        session = _InstallSession(self.store, self.fetcher)
        installed: list[str] = []
        failures: list[ComponentFailure] = []

        for identifier in requested:
            if identifier in installed or any(f.identifier == identifier for f in failures):
                logger.debug(f"Component '{identifier}' requested more than once")
                continue

            if identifier in session.installed:
                logger.info(f"Component '{identifier}' is already installed")
                installed.append(identifier)
                continue

            try:
                await session.install(identifier, ())
            except ComponentError as e:
                logger.warning(f"Unable to install component '{identifier}': {e.message}")
                failures.append(ComponentFailure(identifier=identifier, reason=_failure_reason(e), message=e.message))
                continue

            logger.info(f"Successfully installed component: {identifier}")
            installed.append(identifier)

        if not failures:
            status = InstallStatus.SUCCESS
        elif not installed:
            status = InstallStatus.FAILED
        else:
            status = InstallStatus.PARTIAL

        return InstallResult(status=status, plan=session.plan, installed=installed, failures=failures)

    async def install(self, identifier: str) -> list[str]:
        """
        Install one component.

        Returns:
            Dependency identifiers installed, dependencies before dependents

        Raises:
            ComponentError: Subclass describing the first failure
        """
        session = _InstallSession(self.store, self.fetcher)
        return await session.install(identifier, ())


class _InstallSession:
    """State of one top-level install call."""

    def __init__(self, store: KnowledgeStoreProtocol, fetcher: ArtifactFetcher):
        self.store = store
        self.fetcher = fetcher
        self.installed: set[str] = set()
        # Dependencies installed during the call, in completion order
        self.plan: list[str] = []

    async def install(self, identifier: str, chain: tuple[str, ...]) -> list[str]:
        """Install component and return the dependencies installed for it."""
        chain = (*chain, identifier)

        ref = self.store.find_by_identifier(identifier)
        logger.debug(f"Validating component '{identifier}'")
        metadata = check_component(self.store, ref)
        logger.debug(f"Component '{identifier}' is specified correctly ({metadata.address})")

        plan = await install_dependencies(self.store, ref, self.install_dependency, chain)

        await self.fetcher.fetch(self.store, ref)

        self.installed.add(identifier)
        return plan

    async def install_dependency(self, identifier: str, chain: tuple[str, ...]) -> list[str]:
        if identifier in self.installed:
            logger.debug(f"Dependency '{identifier}' is already installed")
            return []

        plan = await self.install(identifier, chain)
        self.plan.append(identifier)
        return [*plan, identifier]


def _failure_reason(error: ComponentError) -> FailureReason:
    if isinstance(error, ComponentValidationError):
        return error.reason
    if isinstance(error, CyclicDependencyError):
        return FailureReason.CYCLIC_DEPENDENCY
    if isinstance(error, DependencyInstallError):
        return FailureReason.DEPENDENCY_FAILED
    if isinstance(error, FetchError):
        return FailureReason.FETCH_FAILED
    if isinstance(error, LoadError):
        return FailureReason.LOAD_FAILED
    if isinstance(error, StoreQueryError):
        return FailureReason.STORE_QUERY_FAILED
    return FailureReason.INSTALL_FAILED
