"""
CSpell Configuration Loader
===========================
Finds, parses and flattens CSpell configuration documents.

Resolution order for a document that imports [Y, Z]:
    merge(merge(merge(empty, Y), Z), document)
so imports are applied in listed order and the document's own fields win.
Missing imports and import cycles are recoverable (warning + empty branch);
parse errors abort the whole load.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Union

from config_logging import get_logger, ConfigNotFoundError, ConfigParseError
from .models import CSpellConfig, parse_config

PathLike = Union[str, Path]

CONFIG_FILE_NAMES = (
    "cspell.json",
    ".cspell.json",
    "cSpell.json",
    ".cSpell.json",
)

WARNING_IMPORT_MISSING = "import_missing"
WARNING_IMPORT_CYCLE = "import_cycle"


@dataclass
class ConfigWarning:
    """A recoverable problem met while resolving imports."""
    kind: str
    path: str
    message: str


@dataclass
class _LoadContext:
    """State for one top-level load call; never shared between calls."""
    seen: Set[Path] = field(default_factory=set)
    warnings: List[ConfigWarning] = field(default_factory=list)


def merge_configs(base: CSpellConfig, override: CSpellConfig) -> CSpellConfig:
    """
    Merge two documents, override taking precedence.

    Scalars: override's value unless it is None. Lists: base followed by
    override, duplicates kept. Import paths are never carried forward.
    Neither input is modified.
    """
    def pick(name):
        value = getattr(override, name)
        return value if value is not None else getattr(base, name)

    def concat(name):
        return list(getattr(base, name)) + list(getattr(override, name))

    return CSpellConfig(
        version=pick('version'),
        language=pick('language'),
        enabled=pick('enabled'),
        enable_glob_dot=pick('enable_glob_dot'),
        case_sensitive=pick('case_sensitive'),
        allow_compound_words=pick('allow_compound_words'),
        glob_root=pick('glob_root'),
        words=concat('words'),
        ignore_words=concat('ignore_words'),
        ignore_paths=concat('ignore_paths'),
        files=concat('files'),
        dictionaries=concat('dictionaries'),
        ignore_regexp_list=concat('ignore_regexp_list'),
        include_regexp_list=concat('include_regexp_list'),
        flag_words=concat('flag_words'),
        dictionary_definitions=concat('dictionary_definitions'),
        patterns=concat('patterns'),
        overrides=concat('overrides'),
        import_paths=[],
    )


class CSpellConfigLoader:
    """
    Loader for CSpell configuration files.

    `warnings` holds the recoverable problems (missing imports, cycles) of
    the most recent load call.
    """

    def __init__(self, logger=None):
        self.logger = logger or get_logger('spellcheck.cspell')
        self.warnings: List[ConfigWarning] = []

    def find_config_file(self, directory: Optional[PathLike]) -> Optional[Path]:
        """Return the first candidate config file in `directory`, or None."""
        if directory is None:
            return None
        directory = Path(directory)
        if not directory.is_dir():
            return None

        for file_name in CONFIG_FILE_NAMES:
            candidate = directory / file_name
            if candidate.is_file():
                return candidate
        return None

    def load_from_directory(self, directory: Optional[PathLike]) -> Optional[CSpellConfig]:
        """
        Search `directory` for a configuration file and load it.

        Returns None (not an error) when the directory does not exist or
        holds no candidate file.
        """
        self.warnings = []
        config_file = self.find_config_file(directory)
        if config_file is None:
            self.logger.debug(f"No CSpell configuration file found in: {directory}",
                              directory=str(directory))
            return None

        self.logger.info(f"Loading CSpell configuration from: {config_file.resolve()}",
                         path=str(config_file.resolve()))
        return self._load_top_level(config_file)

    def load_from_file(self, path: PathLike) -> CSpellConfig:
        """
        Load a specific configuration file and resolve its imports.

        Raises:
            ConfigNotFoundError: `path` does not exist
            ConfigParseError: the file or one of its imports is malformed
        """
        self.warnings = []
        if path is None or not Path(path).exists():
            raise ConfigNotFoundError(f"Configuration file does not exist: {path}",
                                      path=str(path) if path is not None else None)
        return self._load_top_level(Path(path))

    def _load_top_level(self, config_file: Path) -> CSpellConfig:
        context = _LoadContext()
        try:
            return self._load_file(config_file, context)
        finally:
            self.warnings = context.warnings

    def _load_file(self, config_file: Path, context: _LoadContext) -> CSpellConfig:
        absolute = config_file.resolve()

        if absolute in context.seen:
            self._warn(context, WARNING_IMPORT_CYCLE, absolute,
                       f"Circular import detected, skipping: {absolute}")
            return CSpellConfig()
        context.seen.add(absolute)

        config = parse_config(self._read(absolute), source=str(absolute))

        if not config.import_paths:
            return config
        return self._process_imports(config, absolute.parent, context)

    def _process_imports(self, config: CSpellConfig, base_directory: Path,
                         context: _LoadContext) -> CSpellConfig:
        merged = CSpellConfig()

        for import_path in config.import_paths:
            import_file = self._resolve_import_path(import_path, base_directory)
            if import_file is None:
                self._warn(context, WARNING_IMPORT_MISSING, import_path,
                           f"Import file not found: {import_path}")
                continue

            self.logger.debug(f"Importing configuration from: {import_file}",
                              import_path=str(import_file))
            imported = self._load_file(import_file, context)
            merged = merge_configs(merged, imported)

        return merge_configs(merged, config)

    @staticmethod
    def _resolve_import_path(import_path: str, base_directory: Path) -> Optional[Path]:
        candidate = Path(import_path)
        if not candidate.is_absolute():
            candidate = base_directory / candidate
        return candidate if candidate.is_file() else None

    @staticmethod
    def _read(path: Path) -> str:
        if not path.is_file():
            raise ConfigNotFoundError(f"Configuration file does not exist: {path}", path=str(path))
        try:
            return path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"Configuration file is not valid UTF-8: {path}",
                                   path=str(path)) from e

    def _warn(self, context: _LoadContext, kind: str, path, message: str):
        self.logger.warning(message, warning_kind=kind, import_path=str(path))
        context.warnings.append(ConfigWarning(kind=kind, path=str(path), message=message))


def find_config_file(directory: Optional[PathLike]) -> Optional[Path]:
    """Return the configuration file `load_from_directory` would pick."""
    return CSpellConfigLoader().find_config_file(directory)


def load_from_directory(directory: Optional[PathLike]) -> Optional[CSpellConfig]:
    """Load the configuration found in `directory` with a fresh loader."""
    return CSpellConfigLoader().load_from_directory(directory)


def load_from_file(path: PathLike) -> CSpellConfig:
    """Load a configuration file with a fresh loader."""
    return CSpellConfigLoader().load_from_file(path)
