"""
CSpell Configuration Support
============================
Loads cspell.json-style configuration documents, resolves their imports,
merges them, and narrows the result to a runtime SpellCheckConfiguration.
"""

__version__ = "1.0.0"

from .models import (
    CSpellConfig,
    DictionaryDefinition,
    Pattern,
    FileOverride,
    parse_config,
)

from .loader import (
    CONFIG_FILE_NAMES,
    CSpellConfigLoader,
    ConfigWarning,
    merge_configs,
    find_config_file,
    load_from_directory,
    load_from_file,
)

from .adapter import (
    DEFAULT_LANGUAGE,
    DEFAULT_ENCODING,
    SpellCheckConfiguration,
    to_spell_check_configuration,
)

__all__ = [
    'CSpellConfig',
    'DictionaryDefinition',
    'Pattern',
    'FileOverride',
    'parse_config',
    'CONFIG_FILE_NAMES',
    'CSpellConfigLoader',
    'ConfigWarning',
    'merge_configs',
    'find_config_file',
    'load_from_directory',
    'load_from_file',
    'DEFAULT_LANGUAGE',
    'DEFAULT_ENCODING',
    'SpellCheckConfiguration',
    'to_spell_check_configuration',
]
