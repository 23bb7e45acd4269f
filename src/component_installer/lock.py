"""Installed components lock file.

Records, per installed component, the address it was cloned from, the commit
checked out and the staging directory. The fetcher writes an entry after every
successful fetch and reads the recorded commit back when it reuses a staging
directory. The lock path is app policy and must be injected.

Lock format (JSON):
{
  "version": "1.0",
  "components": {
    "part_ui": {
      "identifier": "part_ui",
      "source": "https://github.com/org/ui",
      "commit": "abc123...",
      "path": "specifications/ui",
      "installed_at": "2026-10-18T12:00:00+00:00"
    }
  }
}
"""

import json
import logging
from datetime import UTC
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError

logger = logging.getLogger(__name__)

LOCK_VERSION = "1.0"


class InstallLockEntry(BaseModel):
    """One installed component."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    source: str
    commit: str | None = None
    path: str
    installed_at: str


class InstallLock:
    """Components lock file (entries are written through on every record)."""

    def __init__(self, lock_path: Path):
        """Initialize lock with app-provided path; a missing file means no entries.

        Args:
            lock_path: Path to lock file (app determines location)
        """
        self.lock_path = lock_path
        self._entries = self._read()

    def record(self, identifier: str, source: str, commit: str | None, path: Path) -> InstallLockEntry:
        """
        Record an installed component, replacing any previous entry.

        Args:
            identifier: Component identifier
            source: Remote address the component was cloned from
            commit: Commit SHA of the checkout (None if unknown)
            path: Staging directory

        Returns:
            The stored entry
        """
        entry = InstallLockEntry(
            identifier=identifier,
            source=source,
            commit=commit,
            path=str(path),
            installed_at=datetime.now(UTC).isoformat(),
        )
        self._entries[identifier] = entry
        self._write()
        logger.debug(f"Recorded '{identifier}' in {self.lock_path}")
        return entry

    def get(self, identifier: str) -> InstallLockEntry | None:
        """Get the entry of an installed component (None if not recorded)."""
        return self._entries.get(identifier)

    def _read(self) -> dict[str, InstallLockEntry]:
        if not self.lock_path.exists():
            return {}

        try:
            data = json.loads(self.lock_path.read_text(encoding="utf-8"))
            if data.get("version") != LOCK_VERSION:
                logger.warning(f"Lock file version mismatch: expected {LOCK_VERSION}, got {data.get('version')}")
            return {
                identifier: InstallLockEntry.model_validate(entry)
                for identifier, entry in data.get("components", {}).items()
            }
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            logger.error(f"Ignoring unreadable lock file {self.lock_path}: {e}")
            return {}

    def _write(self) -> None:
        data = {
            "version": LOCK_VERSION,
            "components": {identifier: entry.model_dump() for identifier, entry in self._entries.items()},
        }
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            self.lock_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write lock file {self.lock_path}: {e}")
