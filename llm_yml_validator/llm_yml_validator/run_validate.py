#!/usr/bin/env python3
# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for validating LLM.yml files.

Exit codes:
  0 - All files valid
  1 - Validation errors found
  2 - Other errors (missing paths, unreadable or malformed files, broken schema)
"""

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from . import __version__, DEFAULT_SCHEMA_VERSION
from .config.validator_config import validator_config
from .exceptions import LLMYmlFileError, ParseError, SchemaError
from .file_io.source_location import lookup_source
from .schema.schema_loader import load_schema, load_schema_file
from .validation.error_formatter import ErrorFormatter, get_error_message
from .validation.validator import LLMYmlValidator, ValidationResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

LLM_FILE_RE = re.compile(r'(^LLM|[-.]llm)\.(yml|yaml|json)$', re.IGNORECASE)


def is_llm_file(path: Path) -> bool:
    return bool(LLM_FILE_RE.search(path.name))


def find_llm_files(directory: Path, recursive: bool = False) -> List[Path]:
    """Find LLM.yml files in a directory.

    Hidden directories are skipped. Without ``recursive`` only the directory
    itself and its immediate subdirectories are searched.

    Raises:
        OSError: If a directory cannot be listed
    """
    files = []

    def _scan(current: Path, depth: int) -> None:
        for entry in sorted(current.iterdir()):
            if entry.is_dir():
                if not entry.name.startswith('.') and (recursive or depth == 0):
                    _scan(entry, depth + 1)
            elif entry.is_file() and is_llm_file(entry):
                files.append(entry)

    _scan(directory, 0)
    return files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='llm-yml',
        description='Validate LLM.yml files against the LLM.yml schema and best practices',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            'examples:\n'
            '  llm-yml LLM.yml\n'
            '  llm-yml examples/\n'
            '  llm-yml . --recursive\n'
            '\n'
            'exit codes:\n'
            '  0 - All files valid\n'
            '  1 - Validation errors found\n'
            '  2 - Other errors\n'
        ),
    )
    parser.add_argument(
        'paths',
        nargs='*',
        help='LLM.yml files or directories to validate',
    )
    parser.add_argument(
        '-r', '--recursive',
        action='store_true',
        help='Search directories recursively',
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only show errors, no warnings',
    )
    parser.add_argument(
        '--no-best-practices',
        action='store_true',
        help='Skip best practice checks',
    )
    parser.add_argument(
        '--schema',
        default=None,
        help='Validate against this JSON Schema file instead of the bundled one',
    )
    parser.add_argument(
        '--schema-version',
        default=DEFAULT_SCHEMA_VERSION,
        help='Bundled schema version to use (default: %(default)s)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )
    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'llm-yml v{__version__}',
    )
    return parser


class _Run:
    """Per-invocation state: collected results and rendering."""

    def __init__(self, validator: LLMYmlValidator, output_format: str, quiet: bool):
        self.validator = validator
        self.output_format = output_format
        self.quiet = quiet
        self.out = Console(highlight=False, soft_wrap=True)
        self.err = Console(stderr=True, highlight=False, soft_wrap=True)
        self.formatter = ErrorFormatter()
        self.results: List[ValidationResult] = []
        self.failures: List[dict] = []

    @property
    def human(self) -> bool:
        return self.output_format == 'human'

    def validate_file(self, file_path: Path) -> bool:
        if self.human:
            self.out.print()
            self.out.print(self.formatter.heading('Validating:', str(file_path)))

        try:
            result = self.validator.validate_file(file_path)
        except ParseError as e:
            logger.debug(f"Parse error in {file_path}: {e.message}")
            self.failures.append({'file': str(file_path), 'error': e.message, 'line': e.line, 'column': e.column})
            if self.human:
                self.err.print(self.formatter.format_parse_error(e))
            return False
        except LLMYmlFileError as e:
            self.failures.append({'file': str(file_path), 'error': str(e)})
            if self.human:
                self.err.print(self.formatter.format_error(str(e)))
            return False

        self.results.append(result)
        if self.human:
            self._print_result(result)
        return result.valid

    def _print_result(self, result: ValidationResult) -> None:
        if result.valid:
            self.out.print(self.formatter.format_file_valid())
            if result.warnings and not self.quiet:
                self.out.print()
                self.out.print(self.formatter.format_warnings_header())
                for warning in result.warnings:
                    self.out.print(self.formatter.format_warning(warning))
            return

        self.err.print(self.formatter.format_schema_failed())
        for error in result.errors:
            location = lookup_source(result.source_map, error.path)
            self.err.print(self.formatter.format_validation_error(error, location))

    def print_summary(self, total: int) -> None:
        valid_count = sum(1 for r in self.results if r.valid)
        if self.output_format == 'json':
            output = {
                'files': total,
                'valid': valid_count,
                'results': [r.to_dict() for r in self.results],
                'failures': self.failures,
            }
            print(json.dumps(output, indent=2, default=str))
        elif self.output_format == 'github-actions':
            for failure in self.failures:
                print(f"::error file={failure['file']},line={failure.get('line') or 1}::{failure['error']}")
            for result in self.results:
                for error in result.errors:
                    loc = lookup_source(result.source_map, error.path)
                    print(f"::error file={result.file_path},line={loc.line or 1}::{get_error_message(error)}")
                if self.quiet:
                    continue
                for warning in result.warnings:
                    loc = lookup_source(result.source_map, warning.path)
                    print(f"::warning file={result.file_path},line={loc.line or 1}::{warning.message}")
        elif total > 1:
            self.out.print()
            self.out.print(self.formatter.heading('Summary:', f'{valid_count}/{total} file(s) valid'))


def _load_validator(args: argparse.Namespace) -> LLMYmlValidator:
    if args.schema:
        schema = load_schema_file(args.schema)
    else:
        schema = load_schema(args.schema_version)
    return LLMYmlValidator(
        schema,
        config=validator_config,
        best_practices=not args.no_best_practices,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the validator CLI."""
    parser = build_parser()
    raw_args = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(raw_args)

    if not raw_args:
        parser.print_help()
        return EXIT_OK

    if not args.paths:
        parser.print_usage(sys.stderr)
        print('Error: No file or directory specified', file=sys.stderr)
        return EXIT_ERROR

    if args.verbose:
        validator_config.log_level = 'DEBUG'
    validator_config.set_logging()

    err = Console(stderr=True, highlight=False, soft_wrap=True)
    formatter = ErrorFormatter()

    try:
        validator = _load_validator(args)
    except SchemaError as e:
        err.print(formatter.format_error(f'Invalid schema: {e.message}'))
        return EXIT_ERROR

    run = _Run(validator, args.format, args.quiet)
    operational_error = False
    all_valid = True
    total = 0

    for path_str in args.paths:
        path = Path(path_str).resolve()

        if not path.exists():
            err.print(formatter.format_error(f'Path does not exist: {path}'))
            operational_error = True
            continue

        if path.is_dir():
            if run.human:
                run.out.print(formatter.heading('Scanning directory:', str(path)))
            try:
                files = find_llm_files(path, recursive=args.recursive)
            except OSError as e:
                err.print(formatter.format_error(f'Cannot read directory: {e}'))
                operational_error = True
                continue
            logger.info(f"Found {len(files)} LLM.yml file(s) in {path}")
            if not files:
                if run.human:
                    run.out.print(formatter.format_notice('No LLM.yml files found'))
                all_valid = False
                continue
        else:
            files = [path]

        for file_path in files:
            total += 1
            try:
                if not run.validate_file(file_path):
                    all_valid = False
            except SchemaError as e:
                err.print(formatter.format_error(f'Invalid schema: {e.message}'))
                return EXIT_ERROR

    run.print_summary(total)

    if operational_error or run.failures:
        return EXIT_ERROR
    if not all_valid:
        return EXIT_INVALID
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
