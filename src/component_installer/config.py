"""Installer configuration - paths and policies injected by the app.

Apps construct InstallerConfig directly or load it from a TOML file:

    [installer]
    staging_root = "specifications"
    remote_prefixes = ["https://github.com/"]
    source_extension = ".scs"
    clone_timeout = 300
    lock_path = "components.lock"
"""

import tomllib
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

DEFAULT_REMOTE_PREFIXES = ["https://github.com/"]
DEFAULT_SOURCE_EXTENSION = ".scs"
DEFAULT_CLONE_TIMEOUT = 300.0


class InstallerConfig(BaseModel):
    """Installer settings (immutable)."""

    model_config = ConfigDict(frozen=True)

    staging_root: Path
    remote_prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_REMOTE_PREFIXES))
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    clone_timeout: float = Field(default=DEFAULT_CLONE_TIMEOUT, gt=0)
    git_executable: str = "git"
    lock_path: Path | None = None

    @classmethod
    def from_toml(cls, config_path: Path) -> "InstallerConfig":
        """
        Load installer config from the [installer] table of a TOML file.

        Relative paths are resolved against the directory holding the file.

        Args:
            config_path: Path to TOML file

        Returns:
            InstallerConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            KeyError: If [installer] table or staging_root is missing
            tomllib.TOMLDecodeError: If invalid TOML
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Installer config not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        section = data.get("installer", {})
        if not section:
            raise KeyError(f"[installer] section missing in {config_path}")

        base_dir = config_path.parent
        values = dict(section)
        values["staging_root"] = _resolve(base_dir, section["staging_root"])
        if section.get("lock_path"):
            values["lock_path"] = _resolve(base_dir, section["lock_path"])

        return cls(**values)


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path
