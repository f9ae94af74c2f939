"""
LanguageTool Client for SpellCheck
==================================
Wraps the language_tool_python library.

Features:
- One local LanguageTool server per language
- Unsupported language codes fall back to en-US with a warning
- Offsets converted to 1-based line/column positions
- Spelling-rule classification (grammar/style matches are not spelling)

Requires: pip install language-tool-python
Note: First run downloads the LanguageTool distribution (~200MB) and needs Java.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from config_logging import get_logger, EngineCheckError

FALLBACK_LANGUAGE = "en-US"

# Rule id fragments that mark a spelling-class rule
SPELLING_RULE_MARKERS = ("SPELL", "MORFOLOGIK", "HUNSPELL", "TYPO")


def is_spelling_rule(rule_id: Optional[str]) -> bool:
    """True if a LanguageTool rule id belongs to a spelling rule."""
    if not rule_id:
        return False
    return any(marker in rule_id for marker in SPELLING_RULE_MARKERS)


def offset_to_position(text: str, offset: int) -> tuple:
    """Convert a character offset into a 1-based (line, column) pair."""
    line = text.count('\n', 0, offset) + 1
    line_start = text.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


@dataclass
class EngineMatch:
    """A span flagged by LanguageTool."""
    offset: int
    length: int
    line: int
    column: int
    message: str
    rule_id: str
    category: str = ""
    replacements: List[str] = field(default_factory=list)

    @property
    def is_spelling(self) -> bool:
        return is_spelling_rule(self.rule_id)

    def flagged_text(self, text: str) -> str:
        return text[self.offset:self.offset + self.length]


def _match_attr(match, *names, default=None):
    """Read a Match attribute under its camelCase or snake_case name."""
    for name in names:
        value = getattr(match, name, None)
        if value is not None:
            return value
    return default


class LanguageToolEngine:
    """
    LanguageTool integration for spell checking.

    Runs a local Java server; no internet required after installation.
    """

    INTEGRATION_NAME = "LanguageTool"

    def __init__(self, language: str = FALLBACK_LANGUAGE, tool=None):
        """
        Initialize LanguageTool.

        Args:
            language: Language code (e.g. 'en-US', 'en-GB')
            tool: Pre-built tool object exposing check(text); skips server start
        """
        self.logger = get_logger('spellcheck.languagetool')
        self.requested_language = language
        self.language = language
        self._error: Optional[str] = None
        self._tool = tool
        if self._tool is None:
            self._init_tool()

    def _init_tool(self):
        """Initialize LanguageTool (starts local Java server)."""
        try:
            import language_tool_python
        except ImportError as e:
            self._error = f"language-tool-python not installed: {e}"
            return

        try:
            self._tool = language_tool_python.LanguageTool(self.language)
        except ValueError as e:
            self.logger.warning(
                f"Unsupported language: {self.language}. Defaulting to {FALLBACK_LANGUAGE}.",
                language=self.language, error=str(e)
            )
            self.language = FALLBACK_LANGUAGE
            try:
                self._tool = language_tool_python.LanguageTool(self.language)
            except Exception as e2:
                self._error = f"LanguageTool initialization failed: {e2}"
        except Exception as e:
            self._error = f"LanguageTool initialization failed: {e}"

    @property
    def is_available(self) -> bool:
        """Check if LanguageTool is available."""
        return self._tool is not None

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the LanguageTool integration."""
        return {
            'integration': self.INTEGRATION_NAME,
            'available': self.is_available,
            'language': self.language if self.is_available else None,
            'requested_language': self.requested_language,
            'error': self._error,
        }

    def check(self, text: str) -> List[EngineMatch]:
        """
        Check text with LanguageTool.

        Returns every match (spelling and grammar); callers filter with
        EngineMatch.is_spelling.

        Raises:
            EngineCheckError: the engine is unavailable or raised
        """
        if not self.is_available:
            raise EngineCheckError(f"LanguageTool is not available: {self._error}",
                                   language=self.language)

        try:
            matches = self._tool.check(text)
        except Exception as e:
            raise EngineCheckError(f"Check failed: {e}", language=self.language) from e

        results = []
        for match in matches:
            offset = _match_attr(match, 'offset', default=0)
            length = _match_attr(match, 'errorLength', 'error_length', default=0)
            line, column = offset_to_position(text, offset)
            results.append(EngineMatch(
                offset=offset,
                length=length,
                line=line,
                column=column,
                message=_match_attr(match, 'message', default=''),
                rule_id=_match_attr(match, 'ruleId', 'rule_id', default=''),
                category=_match_attr(match, 'category', default=''),
                replacements=list(_match_attr(match, 'replacements', default=[])),
            ))
        return results

    def close(self):
        """Shut down the LanguageTool server."""
        if self._tool is not None:
            close = getattr(self._tool, 'close', None)
            if close is not None:
                close()
            self._tool = None
