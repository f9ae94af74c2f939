"""
Shared fixtures for the SpellCheck tests.

FakeEngine stands in for the Java-backed LanguageTool server: it flags
every word listed in MISSPELLINGS with a spelling rule id, and every
occurrence of GRAMMAR_PHRASE with a grammar rule id.
"""

import json
import os
import re
from pathlib import Path

import pytest

from config_logging import EngineCheckError, reset_config
from spellcheck.languagetool.client import EngineMatch, offset_to_position

MISSPELLINGS = {
    'teh': ['the', 'tea', 'ten', 'tech'],
    'recieve': ['receive'],
    'occurence': ['occurrence', 'occurrences'],
    'Foobarz': [],
}

GRAMMAR_PHRASE = "Their going"


class FakeEngine:
    """Scripted replacement for LanguageToolEngine."""

    instances = []

    def __init__(self, language: str = "en-US", available: bool = True, fail_on: str = None):
        self.language = language
        self.error = None if available else "Java not found"
        self._available = available
        self.fail_on = fail_on
        self.checked_texts = []
        self.closed = False
        FakeEngine.instances.append(self)

    @property
    def is_available(self) -> bool:
        return self._available

    def check(self, text):
        self.checked_texts.append(text)
        if self.fail_on and self.fail_on in text:
            raise EngineCheckError("boom", language=self.language)

        matches = []
        for m in re.finditer(r"[A-Za-z]+", text):
            word = m.group(0)
            suggestions = MISSPELLINGS.get(word, MISSPELLINGS.get(word.lower()))
            if suggestions is not None:
                line, column = offset_to_position(text, m.start())
                matches.append(EngineMatch(
                    offset=m.start(), length=len(word), line=line, column=column,
                    message="Possible spelling mistake found.",
                    rule_id="MORFOLOGIK_RULE_EN_US", category="TYPOS",
                    replacements=list(suggestions),
                ))
        for m in re.finditer(GRAMMAR_PHRASE, text):
            line, column = offset_to_position(text, m.start())
            matches.append(EngineMatch(
                offset=m.start(), length=len(GRAMMAR_PHRASE), line=line, column=column,
                message="Did you mean 'They're'?",
                rule_id="YOUR_NN", category="GRAMMAR",
                replacements=["They're going"],
            ))
        return sorted(matches, key=lambda match: match.offset)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    """Fresh logging config and engine registry for every test."""
    for name in list(os.environ):
        if name.startswith('SPELLCHECK_'):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    FakeEngine.instances = []
    yield
    reset_config()


@pytest.fixture
def fake_engine_factory():
    return FakeEngine


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""
    def _write(relative: str, data) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def project(tmp_path):
    """A small project tree laid out like a Maven project."""
    src = tmp_path / 'src' / 'main' / 'java' / 'com' / 'example'
    src.mkdir(parents=True)
    (src / 'App.java').write_text(
        "/** Teh application entry point. */\n"
        "public class App {\n"
        "    // We recieve input here\n"
        "}\n",
        encoding='utf-8'
    )
    (src / 'Clean.java').write_text("/** Clean class. */\npublic class Clean {}\n", encoding='utf-8')
    resources = tmp_path / 'src' / 'main' / 'resources'
    resources.mkdir(parents=True)
    (resources / 'messages.properties').write_text("greeting=Hello world\n", encoding='utf-8')
    (resources / 'logo.png').write_bytes(b'\x89PNG\r\n')
    (tmp_path / 'README.md').write_text("# Example\n\nAn occurence of a typo.\n", encoding='utf-8')
    return tmp_path
