"""
CSpell Configuration Data Models
================================
Dataclasses for CSpell-compatible configuration documents
(cspell.json, .cspell.json, cSpell.json, .cSpell.json).

One CSpellConfig is one parsed on-disk document before import resolution.
Scalar fields are Optional: None means "not specified, inherit". List fields
are always lists, never None, so merging never has to special-case them.

Scalars are coerced leniently: a number in a string field becomes its text
("version": 0.2 -> "0.2") and "true"/"false" strings are accepted for flags.
Anything else of the wrong type raises ConfigParseError.

See https://cspell.org/configuration/ for the upstream format.
"""

import json
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any

from config_logging import ConfigParseError


# On-disk key -> attribute name, for the plain string lists
STRING_LIST_FIELDS = {
    'words': 'words',
    'ignoreWords': 'ignore_words',
    'ignorePaths': 'ignore_paths',
    'files': 'files',
    'dictionaries': 'dictionaries',
    'ignoreRegExpList': 'ignore_regexp_list',
    'includeRegExpList': 'include_regexp_list',
    'import': 'import_paths',
    'flagWords': 'flag_words',
}

STRING_FIELDS = {
    'version': 'version',
    'language': 'language',
    'globRoot': 'glob_root',
}

BOOLEAN_STRINGS = {'true': True, 'false': False}

TRISTATE_FIELDS = {
    'enabled': 'enabled',
    'enableGlobDot': 'enable_glob_dot',
    'caseSensitive': 'case_sensitive',
    'allowCompoundWords': 'allow_compound_words',
}


@dataclass(frozen=True)
class DictionaryDefinition:
    """A custom dictionary made available to `dictionaries`."""
    name: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in (('name', self.name), ('path', self.path),
                                  ('description', self.description)) if v is not None}


@dataclass(frozen=True)
class Pattern:
    """A named pattern usable from ignoreRegExpList / includeRegExpList."""
    name: Optional[str] = None
    pattern: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in (('name', self.name), ('pattern', self.pattern),
                                  ('description', self.description)) if v is not None}


@dataclass
class FileOverride:
    """
    Settings applied only to files matching `filename`.

    Attributes:
        filename: Glob patterns (the document may give one string or a list)
        language: Language for matching files
        words: Extra words treated as correct in matching files
        ignore_words: Extra words suppressed in matching files
        enabled: Tri-state; False turns checking off for matching files
    """
    filename: List[str] = field(default_factory=list)
    language: Optional[str] = None
    words: List[str] = field(default_factory=list)
    ignore_words: List[str] = field(default_factory=list)
    enabled: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.filename:
            data['filename'] = self.filename[0] if len(self.filename) == 1 else list(self.filename)
        if self.language is not None:
            data['language'] = self.language
        data['words'] = list(self.words)
        data['ignoreWords'] = list(self.ignore_words)
        if self.enabled is not None:
            data['enabled'] = self.enabled
        return data


@dataclass
class CSpellConfig:
    """Configuration model for one CSpell-compatible configuration document."""
    version: Optional[str] = None
    language: Optional[str] = None
    words: List[str] = field(default_factory=list)
    ignore_words: List[str] = field(default_factory=list)
    ignore_paths: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    dictionaries: List[str] = field(default_factory=list)
    dictionary_definitions: List[DictionaryDefinition] = field(default_factory=list)
    patterns: List[Pattern] = field(default_factory=list)
    ignore_regexp_list: List[str] = field(default_factory=list)
    include_regexp_list: List[str] = field(default_factory=list)
    import_paths: List[str] = field(default_factory=list)
    enabled: Optional[bool] = None
    enable_glob_dot: Optional[bool] = None
    case_sensitive: Optional[bool] = None
    allow_compound_words: Optional[bool] = None
    flag_words: List[str] = field(default_factory=list)
    glob_root: Optional[str] = None
    overrides: List[FileOverride] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the on-disk (camelCase) document shape."""
        data: Dict[str, Any] = {}
        for key, attr in {**STRING_FIELDS, **TRISTATE_FIELDS}.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        for key, attr in STRING_LIST_FIELDS.items():
            data[key] = list(getattr(self, attr))
        data['dictionaryDefinitions'] = [d.to_dict() for d in self.dictionary_definitions]
        data['patterns'] = [p.to_dict() for p in self.patterns]
        data['overrides'] = [o.to_dict() for o in self.overrides]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> 'CSpellConfig':
        """
        Build a document from decoded JSON.

        Unknown keys are ignored. Values of the wrong type raise
        ConfigParseError naming the offending key.
        """
        if not isinstance(data, dict):
            raise ConfigParseError(
                f"Configuration must be a JSON object, got {type(data).__name__}",
                path=source
            )

        config = cls()
        for key, attr in STRING_FIELDS.items():
            setattr(config, attr, _optional_str(data, key, source))
        for key, attr in TRISTATE_FIELDS.items():
            setattr(config, attr, _optional_bool(data, key, source))
        for key, attr in STRING_LIST_FIELDS.items():
            setattr(config, attr, _string_list(data, key, source))

        config.dictionary_definitions = [
            DictionaryDefinition(
                name=_optional_str(entry, 'name', source, 'dictionaryDefinitions'),
                path=_optional_str(entry, 'path', source, 'dictionaryDefinitions'),
                description=_optional_str(entry, 'description', source, 'dictionaryDefinitions'),
            )
            for entry in _object_list(data, 'dictionaryDefinitions', source)
        ]
        config.patterns = [
            Pattern(
                name=_optional_str(entry, 'name', source, 'patterns'),
                pattern=_optional_str(entry, 'pattern', source, 'patterns'),
                description=_optional_str(entry, 'description', source, 'patterns'),
            )
            for entry in _object_list(data, 'patterns', source)
        ]
        config.overrides = [
            _parse_override(entry, source)
            for entry in _object_list(data, 'overrides', source)
        ]
        return config


def parse_config(text: str, source: Optional[str] = None) -> CSpellConfig:
    """
    Parse the text of a configuration document.

    Args:
        text: JSON document text
        source: Path of the document, used in error messages only

    Returns:
        The parsed CSpellConfig (imports not yet resolved)

    Raises:
        ConfigParseError: malformed JSON or a field of the wrong type
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(
            f"Invalid JSON in configuration {source or '<string>'}: {e.msg} "
            f"(line {e.lineno}, column {e.colno})",
            path=source
        ) from e
    return CSpellConfig.from_dict(data, source)


# =============================================================================
# FIELD HELPERS
# =============================================================================

def _where(key: str, parent: Optional[str]) -> str:
    return f"{parent}.{key}" if parent else key


def _optional_str(data: Dict[str, Any], key: str, source: Optional[str],
                  parent: Optional[str] = None) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigParseError(
        f"'{_where(key, parent)}' must be a string, got {type(value).__name__}",
        path=source, field=_where(key, parent)
    )


def _optional_bool(data: Dict[str, Any], key: str, source: Optional[str],
                   parent: Optional[str] = None) -> Optional[bool]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in BOOLEAN_STRINGS:
        return BOOLEAN_STRINGS[value.strip().lower()]
    raise ConfigParseError(
        f"'{_where(key, parent)}' must be true or false, got {value!r}",
        path=source, field=_where(key, parent)
    )


def _string_list(data: Dict[str, Any], key: str, source: Optional[str],
                 parent: Optional[str] = None) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigParseError(
            f"'{_where(key, parent)}' must be a list, got {type(value).__name__}",
            path=source, field=_where(key, parent)
        )
    for item in value:
        if not isinstance(item, str):
            raise ConfigParseError(
                f"'{_where(key, parent)}' entries must be strings, got {item!r}",
                path=source, field=_where(key, parent)
            )
    return list(value)


def _object_list(data: Dict[str, Any], key: str, source: Optional[str]) -> List[Dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ConfigParseError(
            f"'{key}' must be a list of objects",
            path=source, field=key
        )
    return value


def _parse_override(entry: Dict[str, Any], source: Optional[str]) -> FileOverride:
    filename = entry.get('filename')
    if isinstance(filename, str):
        patterns = [filename]
    else:
        patterns = _string_list(entry, 'filename', source, 'overrides')

    return FileOverride(
        filename=patterns,
        language=_optional_str(entry, 'language', source, 'overrides'),
        words=_string_list(entry, 'words', source, 'overrides'),
        ignore_words=_string_list(entry, 'ignoreWords', source, 'overrides'),
        enabled=_optional_bool(entry, 'enabled', source, 'overrides'),
    )
