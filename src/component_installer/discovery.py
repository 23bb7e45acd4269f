"""Source file discovery in a staged component directory.

Convention: only immediate entries of the staged directory are considered, and
only regular files whose name ends with the source extension.
"""

from pathlib import Path


def discover_source_files(component_dir: Path, extension: str) -> list[Path]:
    """
    Discover loadable source files in a staged component directory.

    Args:
        component_dir: Path to the staged (cloned) component
        extension: Source file extension including the dot (e.g. ".scs")

    Returns:
        Sorted list of source file paths (empty if the directory is missing)

    Example:
        >>> files = discover_source_files(Path("specifications/ui"), ".scs")
        >>> print([f.name for f in files])
        ['ui_component.scs', 'ui_concepts.scs']
    """
    if not component_dir.exists() or not component_dir.is_dir():
        return []

    return sorted(f for f in component_dir.iterdir() if f.is_file() and f.name.endswith(extension))
