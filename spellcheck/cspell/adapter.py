"""
Runtime Spell Check Configuration
=================================
Narrows a flattened CSpell document to the settings the checking step
actually consumes, and layers explicit (CLI / environment) overrides on top.

Precedence, lowest to highest:
1. Built-in defaults (en-US, UTF-8, no ignore words)
2. The flattened CSpell document
3. Explicit overrides; explicit ignore words are added, not substituted
4. Per-file `overrides` entries whose filename glob matches the file
"""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ..globs import matches_any
from .models import CSpellConfig, FileOverride

DEFAULT_LANGUAGE = "en-US"
DEFAULT_ENCODING = "UTF-8"


@dataclass
class SpellCheckConfiguration:
    """Configuration for spell checking."""
    language: str = DEFAULT_LANGUAGE
    encoding: str = DEFAULT_ENCODING
    custom_dictionary: Optional[Path] = None
    ignore_words: List[str] = field(default_factory=list)
    enabled: bool = True
    overrides: List[FileOverride] = field(default_factory=list)
    base_dir: Optional[Path] = None
    language_locked: bool = False

    def apply_overrides(
        self,
        language: Optional[str] = None,
        encoding: Optional[str] = None,
        custom_dictionary: Optional[Union[str, Path]] = None,
        ignore_words: Optional[List[str]] = None,
    ) -> 'SpellCheckConfiguration':
        """
        Apply explicit overrides in place and return self.

        Explicit values always beat document-derived ones; explicit ignore
        words are appended to the document-derived list.
        """
        if language is not None:
            self.language = language
            self.language_locked = True
        if encoding is not None:
            self.encoding = encoding
        if custom_dictionary is not None:
            self.custom_dictionary = Path(custom_dictionary)
        if ignore_words:
            self.ignore_words = list(self.ignore_words) + list(ignore_words)

        if not self.encoding or not self.encoding.strip():
            self.encoding = DEFAULT_ENCODING
        return self

    def matching_overrides(self, path: Union[str, Path]) -> List[FileOverride]:
        """Per-file overrides whose filename globs match `path`, in document order."""
        if not self.overrides:
            return []
        return [
            override for override in self.overrides
            if matches_any(path, self.base_dir, override.filename)
        ]

    def for_file(self, path: Union[str, Path]) -> 'SpellCheckConfiguration':
        """Return the configuration that applies to one file."""
        matches = self.matching_overrides(path)
        if not matches:
            return self

        result = copy.copy(self)
        result.ignore_words = list(self.ignore_words)
        for override in matches:
            if override.language is not None and not self.language_locked:
                result.language = _first_language(override.language) or result.language
            result.ignore_words.extend(override.words)
            result.ignore_words.extend(override.ignore_words)
            if override.enabled is not None:
                result.enabled = override.enabled
        return result

    def is_enabled_for(self, path: Union[str, Path]) -> bool:
        return self.for_file(path).enabled


def to_spell_check_configuration(
    cspell_config: Optional[CSpellConfig],
    base_dir: Optional[Union[str, Path]] = None,
) -> SpellCheckConfiguration:
    """
    Convert a flattened CSpell document to a SpellCheckConfiguration.

    Only the first of several comma-separated languages is used. `words`
    and `ignoreWords` both end up in ignore_words, duplicates included.
    Encoding and custom dictionary are never taken from the document.

    Args:
        cspell_config: The flattened document, or None if none was found
        base_dir: Directory of the root configuration file; per-file
            override globs are matched relative to it (or to globRoot)
    """
    config = SpellCheckConfiguration()

    if cspell_config is None:
        return config

    language = _first_language(cspell_config.language)
    if language:
        config.language = language

    config.ignore_words = list(cspell_config.words) + list(cspell_config.ignore_words)

    if cspell_config.enabled is not None:
        config.enabled = cspell_config.enabled
    config.overrides = list(cspell_config.overrides)

    if cspell_config.glob_root:
        glob_root = Path(cspell_config.glob_root)
        if not glob_root.is_absolute() and base_dir is not None:
            glob_root = Path(base_dir) / glob_root
        config.base_dir = glob_root
    elif base_dir is not None:
        config.base_dir = Path(base_dir)

    return config


def _first_language(language: Optional[str]) -> Optional[str]:
    if language is None:
        return None
    first = language.split(',')[0].strip()
    return first or None

