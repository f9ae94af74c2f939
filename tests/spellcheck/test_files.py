"""
Tests for File Collection
=========================
Tests for source directory walking and include/exclude glob handling.
"""

from pathlib import Path

import pytest

from spellcheck.files import collect_files, should_check_file, DEFAULT_EXTENSIONS
from spellcheck.globs import glob_match, matches_any


def _names(files, base):
    return [Path(f).relative_to(base).as_posix() for f in files]


class TestGlobMatch:
    """Tests for segment-aware glob matching."""

    @pytest.mark.parametrize("path,pattern,expected", [
        ("src/main/java/Top.java", "src/main/java/**/*.java", True),
        ("src/main/java/com/example/App.java", "src/main/java/**/*.java", True),
        ("src/test/java/AppTest.java", "src/main/java/**/*.java", False),
        ("docs/a.md", "docs/*", True),
        ("docs/deep/nested/a.md", "docs/*", False),
        ("docs/deep/nested/a.md", "docs/**", True),
        ("docs/deep/nested/a.md", "docs/**/a.md", True),
        ("README.md", "**/README.md", True),
        ("a/b/README.md", "**/README.md", True),
        ("a/b/README.md", "README.md", True),
        ("a/b/notes.txt", "*.md", False),
        ("gen/Gen.java", "./gen/*.java", True),
        ("gen/Gen.java", "/gen/*.java", True),
        ("x/gen/Gen.java", "gen/*.java", False),
        ("src/App.java", "src/?pp.java", True),
        ("src/App.java", "", False),
    ])
    def test_glob_match(self, path, pattern, expected):
        """Test single-segment wildcards and multi-segment double stars."""
        assert glob_match(path, pattern) is expected

    def test_matches_any_uses_base_relative_path(self, tmp_path):
        """Test paths are made relative to the base directory before matching."""
        path = tmp_path / "docs" / "legacy" / "old.md"
        assert matches_any(path, tmp_path, ["nothing/*", "docs/legacy/*"])
        assert not matches_any(path, tmp_path / "docs", ["docs/legacy/*"])
        assert matches_any(path, tmp_path / "docs", ["legacy/*"])


class TestShouldCheckFile:
    """Tests for should_check_file()."""

    def test_default_extensions(self, tmp_path):
        """Test every default extension is checked and others are not."""
        for ext in DEFAULT_EXTENSIONS:
            assert should_check_file(tmp_path / f"a{ext}", tmp_path)
        assert not should_check_file(tmp_path / "a.png", tmp_path)

    def test_include_adds_extension(self, tmp_path):
        """Test include globs add files beyond the default extensions."""
        assert should_check_file(tmp_path / "a.adoc", tmp_path, includes=["*.adoc"])

    def test_exclude_wins(self, tmp_path):
        """Test an exclude beats a matching include."""
        path = tmp_path / "gen" / "Gen.java"
        assert not should_check_file(path, tmp_path, includes=["*.java"], excludes=["gen/*"])

    def test_double_star_exclude(self, tmp_path):
        """Test a leading double star also matches top-level files."""
        path = tmp_path / "Gen.java"
        assert not should_check_file(path, tmp_path, excludes=["**/Gen.java"])


class TestCollectFiles:
    """Tests for collect_files()."""

    def test_default_layout(self, project):
        """Test the standard source directories plus the root README."""
        files = collect_files(project)
        assert _names(files, project) == [
            'README.md',
            'src/main/java/com/example/App.java',
            'src/main/java/com/example/Clean.java',
            'src/main/resources/messages.properties',
        ]

    def test_sorted_and_unique(self, project):
        """Test overlapping source directories yield each file once, sorted."""
        files = collect_files(project, source_dirs=['src/main', 'src/main/java'])
        assert files == sorted(set(files))

    def test_explicit_source_dirs_skip_readme(self, project):
        """Test the root README is only added for the default directories."""
        files = collect_files(project, source_dirs=['src/main/resources'])
        assert _names(files, project) == ['src/main/resources/messages.properties']

    def test_missing_source_dir_ignored(self, project):
        """Test a source directory that does not exist contributes nothing."""
        assert collect_files(project, source_dirs=['does/not/exist']) == []

    def test_absolute_source_dir(self, project):
        """Test absolute source directories are used as given."""
        files = collect_files(project, source_dirs=[project / 'src' / 'main' / 'java'])
        assert len(files) == 2

    def test_excludes(self, project):
        """Test name and double-star excludes remove files."""
        files = collect_files(project, excludes=['README.md', '**/Clean.java'])
        assert _names(files, project) == [
            'src/main/java/com/example/App.java',
            'src/main/resources/messages.properties',
        ]

    def test_mid_pattern_double_star_matches_zero_directories(self, project):
        """Test src/main/java/**/*.java also excludes files directly in src/main/java."""
        (project / 'src' / 'main' / 'java' / 'Top.java').write_text("class Top {}\n", encoding='utf-8')
        files = _names(collect_files(project, excludes=['src/main/java/**/*.java']), project)
        assert 'src/main/java/Top.java' not in files
        assert 'src/main/java/com/example/App.java' not in files
        assert 'src/main/resources/messages.properties' in files

    def test_single_star_stays_in_one_directory(self, project):
        """Test src/main/java/com/* does not reach into nested directories."""
        files = _names(collect_files(project, excludes=['src/main/java/com/*']), project)
        assert 'src/main/java/com/example/App.java' in files

    def test_includes(self, project):
        """Test include globs pick up otherwise skipped files."""
        files = collect_files(project, includes=['*.png'])
        assert 'src/main/resources/logo.png' in _names(files, project)

    def test_empty_project(self, tmp_path):
        """Test an empty directory yields no files."""
        assert collect_files(tmp_path) == []
