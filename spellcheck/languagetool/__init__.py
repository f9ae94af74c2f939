"""
LanguageTool Integration for SpellCheck
=======================================
The checking engine: LanguageTool run as a local server.

Requires: pip install language-tool-python
"""

__version__ = "1.0.0"


def is_available() -> bool:
    """Check if the language_tool_python package can be imported."""
    try:
        import language_tool_python  # noqa: F401
        return True
    except ImportError:
        return False


def get_status() -> dict:
    """Get LanguageTool integration status without starting a server."""
    try:
        import language_tool_python
        return {
            'available': True,
            'error': None,
            'version': getattr(language_tool_python, '__version__', 'unknown'),
        }
    except ImportError as e:
        return {
            'available': False,
            'error': f"language-tool-python not installed: {e}",
            'version': None,
        }
