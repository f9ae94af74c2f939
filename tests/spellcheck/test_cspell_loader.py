"""
Tests for the CSpell configuration loader: discovery, import resolution
and cycle handling.
"""

import pytest

from config_logging import ConfigNotFoundError, ConfigParseError
from spellcheck.cspell.loader import (
    CSpellConfigLoader, CONFIG_FILE_NAMES, WARNING_IMPORT_CYCLE, WARNING_IMPORT_MISSING,
    find_config_file, load_from_directory, load_from_file,
)


@pytest.fixture
def loader():
    return CSpellConfigLoader()


class TestFindConfigFile:
    """Tests for candidate file discovery."""

    def test_candidate_order(self):
        """Test candidate file names and their priority."""
        assert CONFIG_FILE_NAMES == ("cspell.json", ".cspell.json", "cSpell.json", ".cSpell.json")

    def test_plain_name_preferred_over_dot_name(self, tmp_path, write_json):
        """Test cspell.json wins over .cspell.json."""
        write_json('.cspell.json', {"language": "de"})
        write_json('cspell.json', {"language": "fr"})
        assert find_config_file(tmp_path).name == 'cspell.json'
        assert load_from_directory(tmp_path).language == "fr"

    def test_dot_name_found(self, tmp_path, write_json):
        """Test a lone .cspell.json is found."""
        write_json('.cspell.json', {"language": "de"})
        assert find_config_file(tmp_path).name == '.cspell.json'

    def test_none_directory(self):
        """Test no directory means no configuration."""
        assert find_config_file(None) is None
        assert load_from_directory(None) is None

    def test_missing_directory(self, tmp_path):
        """Test a missing directory is not an error."""
        assert load_from_directory(tmp_path / 'nope') is None

    def test_directory_without_config(self, tmp_path):
        """Test a directory without candidates yields None."""
        (tmp_path / 'other.json').write_text('{}', encoding='utf-8')
        assert load_from_directory(tmp_path) is None

    def test_path_that_is_a_file(self, write_json):
        """Test a file path is not searched as a directory."""
        path = write_json('cspell.json', {})
        assert find_config_file(path) is None


class TestLoadFromFile:
    """Tests for loading a single explicit file."""

    def test_simple_document(self, write_json):
        """Test loading a document without imports."""
        path = write_json('cspell.json', {"version": "0.2", "language": "en-US", "words": ["foo", "bar"]})
        config = load_from_file(path)
        assert config.language == "en-US"
        assert config.words == ["foo", "bar"]

    def test_missing_file(self, tmp_path):
        """Test a missing explicit file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError) as exc_info:
            load_from_file(tmp_path / 'missing.json')
        assert exc_info.value.code == "CONFIG_NOT_FOUND"

    def test_none_path(self):
        """Test a None path raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_from_file(None)

    def test_malformed_file(self, write_json):
        """Test malformed JSON raises ConfigParseError."""
        path = write_json('cspell.json', '{"words": [')
        with pytest.raises(ConfigParseError):
            load_from_file(path)

    def test_non_utf8_file(self, tmp_path):
        """Test undecodable bytes raise ConfigParseError."""
        path = tmp_path / 'cspell.json'
        path.write_bytes(b'{"language": "\xff\xfe"}')
        with pytest.raises(ConfigParseError):
            load_from_file(path)

    def test_accepts_string_path(self, write_json):
        """Test string paths are accepted."""
        path = write_json('cspell.json', {"language": "en"})
        assert load_from_file(str(path)).language == "en"


class TestImports:
    """Tests for recursive import resolution."""

    def test_import_fills_missing_fields(self, tmp_path, write_json):
        """Test imported fields fill in what the document omits."""
        write_json('base.json', {"language": "en-GB", "words": ["alpha"]})
        write_json('cspell.json', {"import": ["base.json"]})
        config = load_from_directory(tmp_path)
        assert config.language == "en-GB"
        assert config.words == ["alpha"]
        assert config.import_paths == []

    def test_importer_wins_on_scalars(self, tmp_path, write_json):
        """Test the importing document wins on scalars."""
        write_json('base.json', {"language": "en-GB", "caseSensitive": True})
        write_json('cspell.json', {"import": ["base.json"], "language": "fr"})
        config = load_from_directory(tmp_path)
        assert config.language == "fr"
        assert config.case_sensitive is True

    def test_own_language_beats_every_import(self, tmp_path, write_json):
        """Test the document's own language beats all imports."""
        write_json('y.json', {"language": "de"})
        write_json('z.json', {"language": "es"})
        write_json('cspell.json', {"import": ["y.json", "z.json"], "language": "fr"})
        assert load_from_directory(tmp_path).language == "fr"

    def test_earlier_import_kept_when_later_ones_are_silent(self, tmp_path, write_json):
        """Test a later import that omits a field keeps the earlier value."""
        write_json('y.json', {"language": "de"})
        write_json('z.json', {"words": ["zed"]})
        write_json('cspell.json', {"import": ["y.json", "z.json"]})
        config = load_from_directory(tmp_path)
        assert config.language == "de"
        assert config.words == ["zed"]

    def test_list_order_imports_then_importer(self, tmp_path, write_json):
        """Test list order is imports in order, then the document."""
        write_json('a.json', {"words": ["a1"], "language": "de"})
        write_json('b.json', {"words": ["b1"], "language": "es"})
        write_json('cspell.json', {"import": ["a.json", "b.json"], "words": ["main"]})
        config = load_from_directory(tmp_path)
        assert config.words == ["a1", "b1", "main"]
        # later imports win among imports
        assert config.language == "es"

    def test_nested_imports_resolve_relative_to_importer(self, tmp_path, write_json):
        """Test nested imports resolve against the importing file."""
        write_json('shared/deep/leaf.json', {"ignoreWords": ["leafword"]})
        write_json('shared/base.json', {"import": ["deep/leaf.json"], "ignoreWords": ["baseword"]})
        write_json('cspell.json', {"import": ["shared/base.json"]})
        config = load_from_directory(tmp_path)
        assert config.ignore_words == ["leafword", "baseword"]

    def test_parent_relative_import(self, tmp_path, write_json):
        """Test ../ imports resolve."""
        write_json('common.json', {"words": ["common"]})
        path = write_json('module/cspell.json', {"import": ["../common.json"]})
        assert load_from_file(path).words == ["common"]

    def test_absolute_import(self, tmp_path, write_json):
        """Test absolute import paths are used as given."""
        other = write_json('elsewhere/dict.json', {"words": ["absolute"]})
        write_json('project/cspell.json', {"import": [str(other.resolve())]})
        config = load_from_directory(tmp_path / 'project')
        assert config.words == ["absolute"]

    def test_missing_import_is_skipped_with_warning(self, tmp_path, write_json, loader):
        """Test a missing import is skipped with a warning."""
        write_json('base.json', {"words": ["kept"]})
        write_json('cspell.json', {"import": ["nope.json", "base.json"], "words": ["own"]})
        config = loader.load_from_directory(tmp_path)
        assert config.words == ["kept", "own"]
        assert len(loader.warnings) == 1
        assert loader.warnings[0].kind == WARNING_IMPORT_MISSING
        assert loader.warnings[0].path == "nope.json"

    def test_import_of_directory_counts_as_missing(self, tmp_path, write_json, loader):
        """Test importing a directory counts as missing."""
        (tmp_path / 'sub').mkdir()
        write_json('cspell.json', {"import": ["sub"]})
        loader.load_from_directory(tmp_path)
        assert [w.kind for w in loader.warnings] == [WARNING_IMPORT_MISSING]

    def test_parse_error_in_import_aborts(self, tmp_path, write_json):
        """Test a broken import aborts the whole load."""
        write_json('broken.json', '{not json')
        write_json('cspell.json', {"import": ["broken.json"]})
        with pytest.raises(ConfigParseError) as exc_info:
            load_from_directory(tmp_path)
        assert exc_info.value.details['path'].endswith('broken.json')


class TestImportCycles:
    """Tests for the cycle guard."""

    def test_two_file_cycle_terminates(self, tmp_path, write_json, loader):
        """Test A importing B importing A terminates with a warning."""
        write_json('a.json', {"import": ["b.json"], "words": ["from_a"]})
        write_json('b.json', {"import": ["a.json"], "words": ["from_b"]})
        config = loader.load_from_file(tmp_path / 'a.json')
        assert config.words == ["from_b", "from_a"]
        assert [w.kind for w in loader.warnings] == [WARNING_IMPORT_CYCLE]

    def test_self_import(self, tmp_path, write_json, loader):
        """Test a self import is treated as a cycle."""
        write_json('cspell.json', {"import": ["./cspell.json"], "language": "en"})
        config = loader.load_from_directory(tmp_path)
        assert config.language == "en"
        assert loader.warnings[0].kind == WARNING_IMPORT_CYCLE

    def test_diamond_import_loads_shared_file_once(self, tmp_path, write_json, loader):
        """Test a shared import is applied only once."""
        write_json('shared.json', {"words": ["shared"]})
        write_json('left.json', {"import": ["shared.json"], "words": ["left"]})
        write_json('right.json', {"import": ["shared.json"], "words": ["right"]})
        write_json('cspell.json', {"import": ["left.json", "right.json"]})
        config = loader.load_from_directory(tmp_path)
        assert config.words == ["shared", "left", "right"]
        assert [w.kind for w in loader.warnings] == [WARNING_IMPORT_CYCLE]

    def test_guard_is_fresh_for_each_call(self, tmp_path, write_json, loader):
        """Test each load call starts with a fresh cycle guard."""
        write_json('base.json', {"words": ["alpha"]})
        write_json('cspell.json', {"import": ["base.json"]})
        first = loader.load_from_directory(tmp_path)
        second = loader.load_from_directory(tmp_path)
        assert first.words == second.words == ["alpha"]
        assert loader.warnings == []

    def test_warnings_reset_between_calls(self, tmp_path, write_json, loader):
        """Test warnings only describe the latest call."""
        write_json('cspell.json', {"import": ["missing.json"]})
        loader.load_from_directory(tmp_path)
        assert len(loader.warnings) == 1
        clean = write_json('clean/cspell.json', {"words": []})
        loader.load_from_file(clean)
        assert loader.warnings == []
