"""
Pattern Resolution for Bundle Planning
======================================

Lists the files below a directory and expands include patterns to files.
Hidden files are kept: packages ship dot-files (.npmignore, .bin links)
that the runtime may rely on.
"""

from pathlib import Path
from typing import List

from shipyard_common.logger import get_logger

logger = get_logger("sdk.pattern_resolver")


def list_files(directory: Path) -> List[Path]:
    """
    List every file below a directory, recursively, in sorted order.

    Examples:
        >>> list_files(Path("/nm/left-pad"))
        [PosixPath('/nm/left-pad/index.js'), PosixPath('/nm/left-pad/package.json')]
    """
    return sorted(path for path in directory.rglob("*") if path.is_file())


def resolve_glob_patterns(patterns: List[str], base_dir: Path) -> List[List[Path]]:
    """
    Resolve include patterns to files below base_dir.

    A pattern ending in ``/**`` selects every file below that directory;
    any other pattern is a regular glob and only files are kept.

    Args:
        patterns: Patterns such as "lib/**", "src-gen/**", "package.json"
        base_dir: Directory the patterns are relative to

    Returns:
        One sorted list of matched files per pattern, in pattern order

    Examples:
        >>> resolve_glob_patterns(["lib/**", "package.json"], Path("/assembly"))
        [[PosixPath('/assembly/lib/index.html')], [PosixPath('/assembly/package.json')]]
    """
    results: List[List[Path]] = []

    for pattern in patterns:
        normalized = pattern.replace("\\", "/").lstrip("/")

        if normalized == "**":
            matches = list_files(base_dir)
        elif normalized.endswith("/**"):
            prefix = base_dir / normalized[: -len("/**")]
            matches = list_files(prefix) if prefix.is_dir() else []
        else:
            matches = sorted(path for path in base_dir.glob(normalized) if path.is_file())

        logger.debug("Resolved pattern", pattern=pattern, matches=len(matches))
        results.append(matches)

    return results
