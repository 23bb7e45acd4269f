"""component-installer - Install knowledge-base components and their dependencies.

Public API exports.

The library is mechanism: apps inject policy (store client, source loader,
staging root, cloner).
"""

from .config import InstallerConfig
from .discovery import discover_source_files
from .exceptions import ComponentError
from .exceptions import ComponentValidationError
from .exceptions import CyclicDependencyError
from .exceptions import DependencyInstallError
from .exceptions import FetchError
from .exceptions import LoadError
from .exceptions import StoreQueryError
from .fetcher import ArtifactFetcher
from .git import GitCloner
from .installer import PARAMETER_NAME
from .installer import ComponentInstaller
from .lock import InstallLock
from .lock import InstallLockEntry
from .memory import InMemoryKnowledgeStore
from .protocols import MEMBERSHIP
from .protocols import REUSABLE_COMPONENT_CLASS
from .protocols import ComponentRef
from .protocols import KnowledgeStoreProtocol
from .protocols import RepositoryClonerProtocol
from .protocols import SourceLoaderProtocol
from .resolver import install_dependencies
from .schema import ComponentFailure
from .schema import ComponentMetadata
from .schema import FailureReason
from .schema import InstallResult
from .schema import InstallStatus
from .utils import extract_repository_name
from .utils import select_staging_dir
from .validator import check_component
from .validator import validate_component

__all__ = [
    # Installation
    "ComponentInstaller",
    "PARAMETER_NAME",
    "InstallResult",
    "InstallStatus",
    "ComponentFailure",
    "FailureReason",
    # Validation
    "ComponentMetadata",
    "check_component",
    "validate_component",
    # Dependencies
    "install_dependencies",
    # Fetching
    "ArtifactFetcher",
    "GitCloner",
    "discover_source_files",
    "extract_repository_name",
    "select_staging_dir",
    # Configuration
    "InstallerConfig",
    # Lock file
    "InstallLock",
    "InstallLockEntry",
    # Store
    "ComponentRef",
    "KnowledgeStoreProtocol",
    "SourceLoaderProtocol",
    "RepositoryClonerProtocol",
    "InMemoryKnowledgeStore",
    "MEMBERSHIP",
    "REUSABLE_COMPONENT_CLASS",
    # Exceptions
    "ComponentError",
    "ComponentValidationError",
    "CyclicDependencyError",
    "DependencyInstallError",
    "FetchError",
    "LoadError",
    "StoreQueryError",
]

__version__ = "0.1.0"
