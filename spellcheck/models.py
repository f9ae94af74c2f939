"""
Spell Check Report Models
=========================
Dataclasses for spelling errors and the per-run report consumed by the
report writers in export.py.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any

SUGGESTION_PREVIEW = 3


@dataclass(frozen=True)
class SpellError:
    """
    A single spelling error.

    Attributes:
        file_path: File containing the error
        line: Line number (1-based)
        column: Column number (1-based)
        word: The flagged word
        message: Engine message
        suggestions: Suggested corrections, best first
    """
    file_path: Path
    line: int
    column: int
    word: str
    message: str
    suggestions: tuple = ()

    def suggestion_preview(self, limit: int = SUGGESTION_PREVIEW) -> List[str]:
        return list(self.suggestions[:limit])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'line': self.line,
            'column': self.column,
            'word': self.word,
            'message': self.message,
            'suggestions': list(self.suggestions),
        }

    def __str__(self) -> str:
        text = f"{self.file_path}:{self.line}:{self.column}: '{self.word}' - {self.message}"
        if self.suggestions:
            text += f" [Suggestions: {', '.join(self.suggestion_preview())}]"
        return text


@dataclass
class SpellCheckReport:
    """Results of one spell check run."""
    files_checked: int = 0
    errors: List[SpellError] = field(default_factory=list)
    errors_by_file: Dict[Path, List[SpellError]] = field(default_factory=dict)
    failed_files: List[Path] = field(default_factory=list)

    def increment_files_checked(self):
        self.files_checked += 1

    def add_error(self, error: SpellError):
        self.errors.append(error)
        self.errors_by_file.setdefault(error.file_path, []).append(error)

    def add_failed_file(self, path: Path):
        self.failed_files.append(path)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def files_with_errors(self) -> int:
        return len(self.errors_by_file)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for JSON output."""
        return {
            'files_checked': self.files_checked,
            'error_count': self.error_count,
            'files_with_errors': self.files_with_errors,
            'failed_files': [str(p) for p in self.failed_files],
            'errors': [e.to_dict() for e in self.errors],
        }

    def __str__(self) -> str:
        return f"SpellCheckReport(files_checked={self.files_checked}, error_count={self.error_count})"
