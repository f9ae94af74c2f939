"""
Command-line entry point: python -m spellcheck [options] [BASE_DIR]

Exit codes: 0 clean or skipped, 1 spelling errors (with --fail-on-error),
2 configuration or engine error.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from config_logging import get_config, get_logger, SpellCheckError, SpellCheckFailure
from .export import REPORT_FORMATS, parse_formats
from .runner import SpellCheckOptions, SpellCheckRunner

EXIT_OK = 0
EXIT_SPELLING_ERRORS = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spellcheck',
        description='Spell check project sources and documentation with LanguageTool'
    )
    parser.add_argument('base_dir', nargs='?', type=Path,
                        help='Project base directory (default: current directory)')
    parser.add_argument('--skip', action='store_true', default=None, help='Skip the spell check')
    parser.add_argument('--fail-on-error', dest='fail_on_error', action='store_true', default=None,
                        help='Exit with status 1 when spelling errors are found (default)')
    parser.add_argument('--no-fail-on-error', dest='fail_on_error', action='store_false',
                        help='Report spelling errors without failing')
    parser.add_argument('--language', help='Language code, e.g. en-US or en-GB')
    parser.add_argument('--encoding', help='Source file encoding (default: UTF-8)')
    parser.add_argument('--custom-dictionary', type=Path,
                        help='File with one word per line to accept')
    parser.add_argument('--ignore-word', dest='ignore_words', action='append', default=None,
                        help='Word to accept (repeatable)')
    parser.add_argument('--source-dir', dest='source_dirs', action='append', type=Path, default=None,
                        help='Directory to scan (repeatable)')
    parser.add_argument('--include', dest='includes', action='append', default=None,
                        help='Extra glob of files to check (repeatable)')
    parser.add_argument('--exclude', dest='excludes', action='append', default=None,
                        help='Glob of files to skip (repeatable)')
    parser.add_argument('--output-dir', type=Path, help='Report directory (default: target/spellcheck)')
    parser.add_argument('--no-report', dest='generate_report', action='store_false', default=None,
                        help='Do not write report files')
    parser.add_argument('--format', dest='report_formats',
                        help=f"Comma-separated report formats: {', '.join(REPORT_FORMATS)} or all")
    parser.add_argument('--cspell-config', type=Path,
                        help='CSpell configuration file (default: search the base directory)')
    parser.add_argument('--no-cspell-config', dest='use_cspell_config', action='store_false', default=None,
                        help='Ignore CSpell configuration files')
    return parser


def options_from_args(args: argparse.Namespace) -> SpellCheckOptions:
    """Environment options with the given command-line flags on top."""
    options = SpellCheckOptions.from_env(args.base_dir)

    for name in ('skip', 'fail_on_error', 'language', 'encoding', 'custom_dictionary',
                 'source_dirs', 'includes', 'excludes', 'generate_report',
                 'cspell_config', 'use_cspell_config'):
        value = getattr(args, name)
        if value is not None:
            setattr(options, name, value)

    if args.ignore_words:
        options.ignore_words = list(options.ignore_words) + args.ignore_words
    if args.output_dir is not None:
        options.output_dir = args.output_dir
    if args.report_formats is not None:
        options.report_formats = parse_formats(args.report_formats)
    return options


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger('spellcheck')

    is_valid, config_errors = get_config().validate()
    if not is_valid:
        for message in config_errors:
            logger.warning(f"Logging configuration: {message}")

    try:
        options = options_from_args(args)
        SpellCheckRunner(options, logger=logger).execute()
    except SpellCheckFailure as e:
        logger.error(e.message)
        return EXIT_SPELLING_ERRORS
    except SpellCheckError as e:
        logger.error(f"Error during spell check execution: {e.message}", error_code=e.code)
        return EXIT_FAILURE
    except (OSError, ValueError) as e:
        logger.exception(f"Error during spell check execution: {e}")
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
