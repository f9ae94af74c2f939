"""
File collection for spell checking.

Walks the source directories and keeps files with a checked extension,
plus anything matching an include glob, minus anything matching an
exclude glob. Glob rules are those of globs.py: patterns containing a '/'
are matched segment by segment against the path relative to the base
directory, other patterns against the bare file name.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .globs import matches_any

DEFAULT_EXTENSIONS = ('.java', '.md', '.txt', '.properties', '.xml')

DEFAULT_SOURCE_DIRS = (
    'src/main/java',
    'src/test/java',
    'src/main/resources',
)


def should_check_file(
    path: Path,
    base_dir: Path,
    includes: Optional[Sequence[str]] = None,
    excludes: Optional[Sequence[str]] = None,
) -> bool:
    """Decide whether a single file is spell checked."""
    if excludes and matches_any(path, base_dir, excludes):
        return False
    if path.suffix in DEFAULT_EXTENSIONS:
        return True
    return bool(includes) and matches_any(path, base_dir, includes)


def default_source_dirs(base_dir: Path) -> List[Path]:
    return [base_dir / d for d in DEFAULT_SOURCE_DIRS if (base_dir / d).is_dir()]


def collect_files(
    base_dir: Path,
    source_dirs: Optional[Iterable[Path]] = None,
    includes: Optional[Sequence[str]] = None,
    excludes: Optional[Sequence[str]] = None,
) -> List[Path]:
    """
    Get the list of files to spell check.

    Args:
        base_dir: Project base directory
        source_dirs: Directories to scan; defaults to the standard source
            directories under base_dir plus a root README.md
        includes: Extra glob patterns to check beyond the default extensions
        excludes: Glob patterns of files never to check

    Returns:
        Sorted, de-duplicated list of files
    """
    base_dir = Path(base_dir)
    files = set()

    source_dirs = [Path(d) for d in source_dirs] if source_dirs else []
    if source_dirs:
        dirs_to_scan = [d if d.is_absolute() else base_dir / d for d in source_dirs]
        dirs_to_scan = [d for d in dirs_to_scan if d.is_dir()]
    else:
        dirs_to_scan = default_source_dirs(base_dir)
        readme = base_dir / 'README.md'
        if readme.is_file() and not (excludes and matches_any(readme, base_dir, excludes)):
            files.add(readme)

    for directory in dirs_to_scan:
        for path in directory.rglob('*'):
            if path.is_file() and should_check_file(path, base_dir, includes, excludes):
                files.add(path)

    return sorted(files)
