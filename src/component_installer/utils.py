"""Remote address helpers for staging directory naming.

Staging names are deterministic so repeated installs of the same component land
in the same directory: the repository name first, then the repository name with
a short hash of the address when the plain name belongs to another source.
"""

import hashlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Marker file in a staging directory holding the address it was cloned from
SOURCE_MARKER = ".component-source"

ADDRESS_HASH_LENGTH = 8


def is_remote_source(address: str, prefixes: list[str]) -> bool:
    """Check if address starts with one of the recognised remote prefixes."""
    return any(address.startswith(prefix) for prefix in prefixes)


def extract_repository_name(address: str) -> str:
    """Extract repository name from the final path segment of address.

    Examples:
        >>> extract_repository_name("https://github.com/org/ui-component")
        'ui-component'
        >>> extract_repository_name("https://github.com/org/ui-component.git/")
        'ui-component'
    """
    segment = address.rstrip("/").rsplit("/", 1)[-1]
    if segment.endswith(".git"):
        segment = segment[: -len(".git")]
    return segment


def is_valid_repository_name(name: str) -> bool:
    """Check if name can be used as a directory name below the staging root."""
    return name not in ("", ".", "..")


def address_hash(address: str) -> str:
    """Short stable hash of an address."""
    return hashlib.sha1(address.encode("utf-8")).hexdigest()[:ADDRESS_HASH_LENGTH]


def staging_dir_candidates(staging_root: Path, address: str) -> list[Path]:
    """Candidate staging directories for address, in preference order."""
    name = extract_repository_name(address)
    return [staging_root / name, staging_root / f"{name}-{address_hash(address)}"]


def read_source_marker(directory: Path) -> str | None:
    """Read the address a staging directory was cloned from (None if unmarked)."""
    marker = directory / SOURCE_MARKER
    if not marker.is_file():
        return None
    try:
        return marker.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.debug(f"Could not read source marker in {directory}: {e}")
        return None


def write_source_marker(directory: Path, address: str) -> None:
    """Mark a staging directory as cloned from address."""
    (directory / SOURCE_MARKER).write_text(address + "\n", encoding="utf-8")


def select_staging_dir(staging_root: Path, address: str) -> tuple[Path, bool] | None:
    """
    Choose the staging directory for address.

    A candidate is usable if it doesn't exist yet, or if its source marker
    matches address. Existing directories owned by another source are never
    reused.

    Args:
        staging_root: Root directory for staged components
        address: Remote address of the component

    Returns:
        (directory, reuse) where reuse is True if directory already holds a
        clone of address, or None if the address has no usable repository
        name or every candidate is taken
    """
    if not is_valid_repository_name(extract_repository_name(address)):
        return None

    for candidate in staging_dir_candidates(staging_root, address):
        if not candidate.exists():
            return candidate, False
        if read_source_marker(candidate) == address:
            return candidate, True
        logger.debug(f"Staging directory {candidate} is taken by another source")
    return None
