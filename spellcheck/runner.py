"""
Spell Check Runner
==================
The "check" goal: build the configuration, collect files, run the checker,
write reports, and fail when spelling errors were found.

Configuration precedence (lowest to highest):
1. Built-in defaults
2. CSpell configuration (explicit file, or searched in the base directory)
3. Explicit options (CLI flags / SPELLCHECK_* environment variables)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from config_logging import get_logger, SpellCheckError, SpellCheckFailure, StructuredLogger
from .checker import SpellChecker
from .cspell.adapter import SpellCheckConfiguration, to_spell_check_configuration
from .cspell.loader import CSpellConfigLoader
from .cspell.models import CSpellConfig
from .export import REPORT_FORMATS, REPORT_FILE_NAMES, parse_formats, validate_formats, write_reports
from .files import collect_files
from .models import SpellCheckReport

DEFAULT_OUTPUT_SUBDIR = Path('target') / 'spellcheck'


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ('true', '1', 'yes', 'on')


def _env_list(name: str, separator: str = ',') -> List[str]:
    value = os.environ.get(name, '')
    return [part.strip() for part in value.split(separator) if part.strip()]


@dataclass
class SpellCheckOptions:
    """
    Options for one spell check run.

    None for language/encoding/custom_dictionary means "not given": the
    CSpell configuration (or the built-in default) decides.
    """
    base_dir: Path = field(default_factory=Path.cwd)
    skip: bool = False
    fail_on_error: bool = True
    encoding: Optional[str] = None
    language: Optional[str] = None
    custom_dictionary: Optional[Path] = None
    ignore_words: List[str] = field(default_factory=list)
    source_dirs: List[Path] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    output_dir: Optional[Path] = None
    generate_report: bool = True
    report_formats: List[str] = field(default_factory=lambda: list(REPORT_FORMATS))
    cspell_config: Optional[Path] = None
    use_cspell_config: bool = True

    def __post_init__(self):
        self.base_dir = Path(self.base_dir)
        self.report_formats = validate_formats(self.report_formats)
        if self.output_dir is None:
            self.output_dir = self.base_dir / DEFAULT_OUTPUT_SUBDIR

    @classmethod
    def from_env(cls, base_dir: Optional[Path] = None) -> 'SpellCheckOptions':
        """Load options from SPELLCHECK_* environment variables."""
        base = Path(base_dir or os.environ.get('SPELLCHECK_BASE_DIR') or Path.cwd())
        custom_dictionary = os.environ.get('SPELLCHECK_CUSTOM_DICTIONARY')
        cspell_config = os.environ.get('SPELLCHECK_CSPELL_CONFIG')
        output_dir = os.environ.get('SPELLCHECK_OUTPUT_DIR')
        return cls(
            base_dir=base,
            skip=_env_bool('SPELLCHECK_SKIP', False),
            fail_on_error=_env_bool('SPELLCHECK_FAIL_ON_ERROR', True),
            encoding=os.environ.get('SPELLCHECK_ENCODING') or None,
            language=os.environ.get('SPELLCHECK_LANGUAGE') or None,
            custom_dictionary=Path(custom_dictionary) if custom_dictionary else None,
            ignore_words=_env_list('SPELLCHECK_IGNORE_WORDS'),
            source_dirs=[Path(p) for p in _env_list('SPELLCHECK_SOURCE_DIRS', os.pathsep)],
            includes=_env_list('SPELLCHECK_INCLUDES'),
            excludes=_env_list('SPELLCHECK_EXCLUDES'),
            output_dir=Path(output_dir) if output_dir else None,
            generate_report=_env_bool('SPELLCHECK_GENERATE_REPORT', True),
            report_formats=parse_formats(os.environ.get('SPELLCHECK_REPORT_FORMATS')),
            cspell_config=Path(cspell_config) if cspell_config else None,
            use_cspell_config=_env_bool('SPELLCHECK_USE_CSPELL_CONFIG', True),
        )


class SpellCheckRunner:
    """Runs one spell check over a project."""

    def __init__(
        self,
        options: SpellCheckOptions,
        engine_factory: Optional[Callable] = None,
        logger: Optional[StructuredLogger] = None
    ):
        self.options = options
        self.engine_factory = engine_factory
        self.logger = logger or get_logger('spellcheck')

    def execute(self) -> Optional[SpellCheckReport]:
        """
        Run the check.

        Returns:
            The report, or None when the run was skipped or had nothing to check

        Raises:
            SpellCheckFailure: errors were found and fail_on_error is set
            EngineUnavailableError: LanguageTool could not be started
        """
        options = self.options
        StructuredLogger.new_correlation_id()

        if options.skip:
            self.logger.info("Spell check is skipped.")
            return None

        self.logger.info("Starting spell check...")
        configuration = self.create_configuration()
        self.logger.info(f"Language: {configuration.language}", language=configuration.language)
        self.logger.info(f"Encoding: {configuration.encoding}", encoding=configuration.encoding)

        if not configuration.enabled:
            self.logger.info("Spell check is disabled by the CSpell configuration.")
            return None

        files = collect_files(options.base_dir, options.source_dirs,
                              options.includes, options.excludes)
        if not files:
            self.logger.warning("No files found to spell check.")
            return None

        self.logger.info(f"Checking {len(files)} file(s)...", file_count=len(files))
        with self.logger.log_operation("spell check", file_count=len(files)):
            with SpellChecker(configuration, self.engine_factory) as checker:
                report = checker.check(files)

        written = {}
        if options.generate_report:
            written = write_reports(report, options.output_dir, options.report_formats)
            for fmt, path in written.items():
                self.logger.info(f"Report generated at: {path.resolve()}", report_format=fmt)

        self.log_summary(report)

        if options.fail_on_error and report.has_errors:
            report_path = written.get('text') or (Path(options.output_dir) / REPORT_FILE_NAMES['text'])
            raise SpellCheckFailure(report.error_count, str(Path(report_path).resolve()))

        return report

    def create_configuration(self) -> SpellCheckConfiguration:
        """Build the runtime configuration from CSpell config and explicit options."""
        options = self.options
        cspell_config, config_dir = (None, None)
        if options.use_cspell_config:
            cspell_config, config_dir = self.load_cspell_config()

        configuration = to_spell_check_configuration(cspell_config, base_dir=config_dir or options.base_dir)
        if cspell_config is not None:
            self.logger.info("Using CSpell configuration file")

        return configuration.apply_overrides(
            language=options.language,
            encoding=options.encoding,
            custom_dictionary=options.custom_dictionary,
            ignore_words=options.ignore_words,
        )

    def load_cspell_config(self) -> Tuple[Optional[CSpellConfig], Optional[Path]]:
        """
        Load the CSpell configuration.

        Returns:
            (document, directory of the root config file); (None, None) if no
            configuration was found or it could not be loaded
        """
        options = self.options
        loader = CSpellConfigLoader()
        try:
            if options.cspell_config is not None:
                config_file = Path(options.cspell_config)
                if not config_file.is_absolute():
                    config_file = options.base_dir / config_file
                if not config_file.exists():
                    self.logger.warning(f"Specified CSpell config file not found: {config_file.resolve()}",
                                        path=str(config_file))
                    return None, None
                return loader.load_from_file(config_file), config_file.resolve().parent

            found = loader.find_config_file(options.base_dir)
            config = loader.load_from_directory(options.base_dir)
            return config, (found.resolve().parent if found else None)
        except SpellCheckError as e:
            self.logger.warning(f"Failed to load CSpell configuration: {e.message}",
                                error_code=e.code)
            return None, None

    def log_summary(self, report: SpellCheckReport):
        """Log the spell check summary."""
        self.logger.info("========================================")
        self.logger.info("Spell Check Summary")
        self.logger.info("========================================")
        self.logger.info(f"Files checked: {report.files_checked}")
        self.logger.info(f"Errors found: {report.error_count}")
        if report.failed_files:
            self.logger.warning(f"Files that could not be checked: {len(report.failed_files)}")

        if report.has_errors:
            self.logger.warning("Spell check completed with errors!")
        else:
            self.logger.info("Spell check completed successfully!")
        self.logger.info("========================================")
