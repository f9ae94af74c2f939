"""
SpellCheck Tests Package
========================
Test suite for the CSpell loader, checker, report writers and runner.

Run all tests: python3 -m pytest tests/ -v
Run specific: python3 -m pytest tests/spellcheck/test_cspell_loader.py -v
"""
