"""
SpellCheck
==========
Spell checks project sources and documentation with LanguageTool and
writes plain-text, Checkstyle XML and JUnit XML reports.

Settings come from CSpell-compatible configuration files (cspell.json,
.cspell.json, cSpell.json, .cSpell.json, with imports) plus explicit
command-line / environment overrides.

Usage: python -m spellcheck [BASE_DIR] [options]
"""

__version__ = "1.0.0"
__author__ = "SpellCheck"

from .models import SpellError, SpellCheckReport
from .checker import SpellChecker
from .runner import SpellCheckOptions, SpellCheckRunner


def get_status() -> dict:
    """Get status of the checking engine integration."""
    from . import languagetool
    return {
        'version': __version__,
        'languagetool': languagetool.get_status(),
    }


__all__ = [
    'SpellError',
    'SpellCheckReport',
    'SpellChecker',
    'SpellCheckOptions',
    'SpellCheckRunner',
    'get_status',
]
