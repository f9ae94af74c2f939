"""
Path glob matching for include/exclude options and CSpell `overrides`.

Patterns use the Ant / CSpell conventions on '/'-separated paths:
- `*`, `?` and `[...]` match within a single path segment
- `**` as a whole segment matches zero or more segments
- a pattern without '/' is matched against the file name alone
- a leading './' or '/' anchors the pattern at the base directory
"""

import fnmatch
from pathlib import Path
from typing import List, Optional, Sequence, Union


def _split(value: str) -> List[str]:
    return [part for part in value.split('/') if part and part != '.']


def _match_segments(path_parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not path_parts

    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == '**':
        return any(_match_segments(path_parts[i:], rest) for i in range(len(path_parts) + 1))
    if not path_parts:
        return False
    return fnmatch.fnmatchcase(path_parts[0], head) and _match_segments(path_parts[1:], rest)


def glob_match(path: str, pattern: str) -> bool:
    """
    True if the '/'-separated relative `path` matches `pattern`.

    >>> glob_match('src/main/java/Top.java', 'src/main/java/**/*.java')
    True
    >>> glob_match('docs/deep/a.md', 'docs/*')
    False
    """
    pattern = pattern.strip().replace('\\', '/')
    if not pattern:
        return False

    path_parts = _split(path)
    if '/' not in pattern:
        return bool(path_parts) and fnmatch.fnmatchcase(path_parts[-1], pattern)
    return _match_segments(path_parts, _split(pattern))


def relative_posix(path: Union[str, Path], base_dir: Optional[Union[str, Path]]) -> str:
    """`path` relative to `base_dir` with '/' separators; unchanged if outside it."""
    path = Path(path)
    if base_dir is not None:
        try:
            return path.resolve().relative_to(Path(base_dir).resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def matches_any(path: Union[str, Path], base_dir: Optional[Union[str, Path]],
                patterns: Sequence[str]) -> bool:
    """True if `path` (taken relative to `base_dir`) matches any of `patterns`."""
    relative = relative_posix(path, base_dir)
    return any(glob_match(relative, pattern) for pattern in patterns)
