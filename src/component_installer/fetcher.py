"""Artifact fetcher - stage a component's sources and load them into the store.

Process:
1. Read the component's remote address
2. Skip silently if the address isn't a recognised remote source
3. Pick a deterministic staging directory (reusing one already cloned from
   the same address)
4. Clone into it, removing the directory again if the clone fails
5. Load every source file into the store via the source loader
6. Record the install in the lock file (if provided)
"""

import asyncio
import logging
import shutil
from pathlib import Path

from .config import InstallerConfig
from .discovery import discover_source_files
from .exceptions import FetchError
from .exceptions import LoadError
from .exceptions import StoreQueryError
from .git import GitCloner
from .lock import InstallLock
from .protocols import ComponentRef
from .protocols import KnowledgeStoreProtocol
from .protocols import RepositoryClonerProtocol
from .protocols import SourceLoaderProtocol
from .utils import extract_repository_name
from .utils import is_remote_source
from .utils import is_valid_repository_name
from .utils import select_staging_dir
from .utils import write_source_marker
from .validator import read_address

logger = logging.getLogger(__name__)


class ArtifactFetcher:
    """Stages component repositories under the configured staging root."""

    def __init__(
        self,
        config: InstallerConfig,
        loader: SourceLoaderProtocol,
        cloner: RepositoryClonerProtocol | None = None,
        lock: InstallLock | None = None,
    ):
        """Initialize fetcher.

        Args:
            config: Installer config (staging root, prefixes, source extension)
            loader: Loads staged source files into the store
            cloner: Repository cloner (defaults to GitCloner from config)
            lock: Optional lock file manager
        """
        self.config = config
        self.loader = loader
        self.cloner = cloner or GitCloner(git_executable=config.git_executable, timeout=config.clone_timeout)
        self.lock = lock

    async def fetch(self, store: KnowledgeStoreProtocol, ref: ComponentRef) -> Path | None:
        """
        Stage and load a component's sources.

        Args:
            store: Knowledge store client
            ref: Validated component handle

        Returns:
            Staging directory, or None if the address isn't a recognised remote source

        Raises:
            FetchError: If the address can't be read, no staging directory is
                available, or the clone fails
            LoadError: If a source file can't be loaded
        """
        try:
            identifier = store.get_identifier(ref)
            address = read_address(store, ref)
        except StoreQueryError as e:
            raise FetchError(f"Failed to read component address: {e}", context=e.context) from e

        if not is_remote_source(address, self.config.remote_prefixes):
            logger.debug(f"Address '{address}' of '{identifier}' is not a recognised remote source, skipping")
            return None

        if not is_valid_repository_name(extract_repository_name(address)):
            raise FetchError(
                f"Address '{address}' of '{identifier}' has no repository name",
                context={"identifier": identifier, "address": address},
            )

        selection = select_staging_dir(self.config.staging_root, address)
        if selection is None:
            raise FetchError(
                f"No free staging directory for '{identifier}' under {self.config.staging_root}",
                context={"identifier": identifier, "address": address},
            )
        component_dir, reuse = selection

        commit = None
        if reuse:
            logger.info(f"Reusing staged '{identifier}' at {component_dir}")
            entry = self.lock.get(identifier) if self.lock is not None else None
            commit = entry.commit if entry is not None else None
        else:
            commit = await self._clone(identifier, address, component_dir)

        self._load_sources(identifier, component_dir)

        if self.lock is not None:
            self.lock.record(identifier=identifier, source=address, commit=commit, path=component_dir)

        return component_dir

    async def _clone(self, identifier: str, address: str, component_dir: Path) -> str | None:
        context = {"identifier": identifier, "address": address, "target_dir": str(component_dir)}

        try:
            component_dir.mkdir(parents=True)
        except OSError as e:
            raise FetchError(f"Failed to create staging directory {component_dir}: {e}", context=context) from e

        try:
            commit = await self.cloner.clone(address, component_dir)
        except (FetchError, asyncio.CancelledError):
            _discard(component_dir)
            raise
        except Exception as e:
            _discard(component_dir)
            raise FetchError(f"Failed to clone {address}: {e}", context=context) from e

        write_source_marker(component_dir, address)
        logger.debug(f"Cloned '{identifier}' at commit {commit}")
        return commit

    def _load_sources(self, identifier: str, component_dir: Path) -> None:
        source_files = discover_source_files(component_dir, self.config.source_extension)
        if not source_files:
            logger.warning(f"No {self.config.source_extension} files found for '{identifier}' in {component_dir}")

        for source_file in source_files:
            try:
                self.loader.load_source_file(source_file)
            except Exception as e:
                raise LoadError(
                    f"Failed to load {source_file}: {e}",
                    context={"identifier": identifier, "path": str(source_file)},
                ) from e

        logger.info(f"Loaded {len(source_files)} source files for '{identifier}'")


def _discard(component_dir: Path) -> None:
    """Remove a partially cloned staging directory."""
    logger.debug(f"Removing staging directory {component_dir}")
    shutil.rmtree(component_dir, ignore_errors=True)
