"""
Spell Check Report Export
=========================
Export a SpellCheckReport to the formats CI servers understand:

- text: human-readable summary (spellcheck-report.txt)
- checkstyle: Checkstyle XML, read by Jenkins Warnings NG, SonarQube, etc.
- junit: JUnit XML, one failing test case per file with errors

All render_* functions are pure; write_reports() puts the files on disk.
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .models import SpellCheckReport, SpellError

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
CHECKSTYLE_VERSION = "10.0"
SOURCE_NAME = "SpellCheck"
TEXT_SUGGESTION_LIMIT = 5
XML_SUGGESTION_LIMIT = 3

REPORT_FILE_NAMES = {
    'text': 'spellcheck-report.txt',
    'checkstyle': 'spellcheck-checkstyle.xml',
    'junit': 'spellcheck-junit.xml',
}
REPORT_FORMATS = tuple(REPORT_FILE_NAMES)


def _suggestion_suffix(error: SpellError, limit: int = XML_SUGGESTION_LIMIT) -> str:
    if not error.suggestions:
        return ""
    return f" [Suggestions: {', '.join(error.suggestion_preview(limit))}]"


def _to_xml(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return XML_HEADER + "\n" + ET.tostring(root, encoding="unicode") + "\n"


def render_text(report: SpellCheckReport) -> str:
    """Render the plain-text report."""
    lines = [
        "Spell Check Report",
        "==================",
        "",
        f"Files checked: {report.files_checked}",
        f"Errors found: {report.error_count}",
        "",
    ]

    if not report.has_errors:
        lines.append("No spelling errors found!")
    else:
        lines.extend(["Errors by file:", "---------------", ""])
        for path, file_errors in report.errors_by_file.items():
            lines.append(str(path))
            for error in file_errors:
                lines.append(f"  Line {error.line}, Column {error.column}: '{error.word}'")
                lines.append(f"    {error.message}")
                if error.suggestions:
                    lines.append(f"    Suggestions: {', '.join(error.suggestion_preview(TEXT_SUGGESTION_LIMIT))}")
                lines.append("")

    if report.failed_files:
        lines.extend(["", "Files that could not be checked:"])
        lines.extend(f"  {path}" for path in report.failed_files)

    return "\n".join(lines) + "\n"


def render_checkstyle(report: SpellCheckReport) -> str:
    """Render the report as Checkstyle XML."""
    root = ET.Element("checkstyle", version=CHECKSTYLE_VERSION)

    for path, file_errors in report.errors_by_file.items():
        file_element = ET.SubElement(root, "file", name=str(Path(path).resolve()))
        for error in file_errors:
            message = f"Spelling error: '{error.word}' - {error.message}{_suggestion_suffix(error)}"
            ET.SubElement(file_element, "error", {
                'line': str(error.line),
                'column': str(error.column),
                'severity': 'error',
                'message': message,
                'source': SOURCE_NAME,
            })

    return _to_xml(root)


def render_junit(report: SpellCheckReport, timestamp: Optional[datetime] = None) -> str:
    """
    Render the report as a JUnit XML test suite.

    Each file with errors is one failing test case; files without errors are
    summarised in a single passing test case.
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    failures = report.files_with_errors

    root = ET.Element("testsuite", {
        'name': SOURCE_NAME,
        'tests': str(report.files_checked),
        'failures': str(failures),
        'errors': '0',
        'time': '0.000',
        'timestamp': timestamp.isoformat().replace('+00:00', 'Z'),
    })

    for path, file_errors in report.errors_by_file.items():
        testcase = ET.SubElement(root, "testcase", name=str(path), classname=SOURCE_NAME, time="0.0")
        detail = "".join(
            f"{path}:{error.line}:{error.column}: '{error.word}' - {error.message}"
            f"{_suggestion_suffix(error)}\n"
            for error in file_errors
        )
        failure = ET.SubElement(testcase, "failure", {
            'message': f"Found {len(file_errors)} spelling error(s) in {path}",
            'type': 'SpellingError',
        })
        failure.text = detail

    passed = report.files_checked - failures
    if passed > 0:
        ET.SubElement(root, "testcase", name=f"{passed} files passed spell check",
                      classname=SOURCE_NAME, time="0.0")

    return _to_xml(root)


RENDERERS = {
    'text': render_text,
    'checkstyle': render_checkstyle,
    'junit': render_junit,
}


def write_reports(
    report: SpellCheckReport,
    output_dir: Path,
    formats: Iterable[str] = REPORT_FORMATS,
) -> Dict[str, Path]:
    """
    Write the requested report formats into `output_dir`.

    Returns:
        Mapping of format name to the written file

    Raises:
        ValueError: unknown format name
    """
    formats = validate_formats(formats)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: Dict[str, Path] = {}
    for fmt in formats:
        target = output_dir / REPORT_FILE_NAMES[fmt]
        target.write_text(RENDERERS[fmt](report), encoding='utf-8')
        written[fmt] = target
    return written


def validate_formats(formats: Iterable[str]) -> List[str]:
    """
    Return `formats` as a list.

    Raises:
        ValueError: unknown format name
    """
    formats = list(formats)
    unknown = [f for f in formats if f not in RENDERERS]
    if unknown:
        raise ValueError(f"Unknown report format(s): {', '.join(unknown)}. "
                         f"Expected one of: {', '.join(REPORT_FORMATS)}")
    return formats


def parse_formats(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated format list ('text,junit'); 'all' selects every format.

    Raises:
        ValueError: unknown format name
    """
    if not value or value.strip().lower() == 'all':
        return list(REPORT_FORMATS)
    return validate_formats(part.strip().lower() for part in value.split(',') if part.strip())
