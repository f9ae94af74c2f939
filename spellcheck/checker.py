"""
Spell Checker
=============
Runs project files through LanguageTool and collects spelling errors.

Only spelling-class matches are reported; grammar and style matches are
dropped. Words from the configuration (CSpell words/ignoreWords, explicit
ignore words, custom dictionary, matching per-file overrides) are never
reported.
"""

import codecs
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set

from config_logging import (
    get_logger, SpellCheckError, EngineCheckError, EngineUnavailableError
)
from .cspell.adapter import SpellCheckConfiguration
from .languagetool.client import LanguageToolEngine
from .models import SpellCheckReport, SpellError


def read_dictionary_words(path: Path, encoding: str = 'utf-8') -> List[str]:
    """
    Read a custom dictionary: one word per line.

    Blank lines and lines starting with '#' are skipped.
    """
    words = []
    with open(path, 'r', encoding=encoding) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                words.append(line)
    return words


class SpellChecker:
    """
    Core spell checker.

    Engines are created lazily, one per language, and cached for the
    lifetime of the checker. Use as a context manager (or call close())
    to shut the LanguageTool servers down.
    """

    CHECKER_NAME = "Spelling (LanguageTool)"

    def __init__(
        self,
        configuration: SpellCheckConfiguration,
        engine_factory: Optional[Callable[[str], LanguageToolEngine]] = None,
        logger=None
    ):
        """
        Args:
            configuration: Runtime configuration (already adapted and overridden)
            engine_factory: Callable language -> engine; defaults to LanguageToolEngine
            logger: StructuredLogger to use
        """
        self.configuration = configuration
        self.engine_factory = engine_factory or LanguageToolEngine
        self.logger = logger or get_logger('spellcheck.checker')
        self._engines: Dict[str, LanguageToolEngine] = {}

        try:
            codecs.lookup(configuration.encoding)
        except LookupError as e:
            raise SpellCheckError(f"Unknown encoding: {configuration.encoding}",
                                  code="INVALID_ENCODING",
                                  details={'encoding': configuration.encoding}) from e

        self.ignore_words: Set[str] = set(configuration.ignore_words)
        if configuration.custom_dictionary is not None:
            self._load_custom_dictionary(Path(configuration.custom_dictionary))

    def _load_custom_dictionary(self, dictionary_file: Path):
        if not dictionary_file.is_file():
            self.logger.warning(f"Custom dictionary not found: {dictionary_file}",
                                path=str(dictionary_file))
            return

        self.logger.debug(f"Loading custom dictionary from: {dictionary_file.resolve()}",
                          path=str(dictionary_file))
        words = read_dictionary_words(dictionary_file)
        self.ignore_words.update(words)
        self.logger.debug("Custom dictionary loaded successfully", word_count=len(words))

    def _engine_for(self, language: str) -> LanguageToolEngine:
        engine = self._engines.get(language)
        if engine is None:
            engine = self.engine_factory(language)
            if not engine.is_available:
                raise EngineUnavailableError(
                    f"Spell checking engine unavailable for {language}: {engine.error}",
                    language=language
                )
            self._engines[language] = engine
        return engine

    def check(self, files: Iterable[Path]) -> SpellCheckReport:
        """
        Check the given files for spelling errors.

        Raises:
            EngineUnavailableError: LanguageTool could not be started
            OSError: a file could not be read
        """
        report = SpellCheckReport()
        start_time = time.time()

        for path in files:
            self.logger.debug(f"Checking file: {Path(path).resolve()}", path=str(path))
            self.check_file(Path(path), report)

        self.logger.debug("Check finished",
                          files_checked=report.files_checked,
                          error_count=report.error_count,
                          duration_ms=round((time.time() - start_time) * 1000, 2))
        return report

    def check_file(self, path: Path, report: SpellCheckReport):
        """Check a single file and add its errors to `report`."""
        report.increment_files_checked()

        file_config = self.configuration.for_file(path)
        if not file_config.enabled:
            self.logger.debug(f"Spell checking disabled for: {path.name}", path=str(path))
            return

        content = path.read_bytes().decode(self.configuration.encoding, errors='replace')
        if not content.strip():
            self.logger.debug(f"Skipping empty file: {path.name}", path=str(path))
            return

        ignore_words = self.ignore_words
        if file_config is not self.configuration:
            ignore_words = ignore_words | set(file_config.ignore_words)

        engine = self._engine_for(file_config.language)
        try:
            matches = engine.check(content)
        except EngineCheckError as e:
            self.logger.warning(f"Error checking file {path.name}: {e.message}", path=str(path))
            report.add_failed_file(path)
            return

        for match in matches:
            if not match.is_spelling:
                continue

            word = match.flagged_text(content)
            if word in ignore_words:
                continue

            error = SpellError(
                file_path=path,
                line=match.line,
                column=match.column,
                word=word,
                message=match.message,
                suggestions=tuple(match.replacements),
            )
            report.add_error(error)

            if self.logger.is_debug_enabled():
                self.logger.debug(f"Error in {path.name} at line {error.line}: {error.word}",
                                  path=str(path))

    def close(self):
        """Shut down every engine started by this checker."""
        for engine in self._engines.values():
            engine.close()
        self._engines.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
