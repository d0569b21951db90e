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

"""Human-readable rendering of validation results."""

import json
from typing import Optional

from rich.style import Style
from rich.text import Text

from ..exceptions import ParseError
from ..file_io.source_location import SourceLocation, format_source
from ..linter.report import BestPracticeWarning, Severity
from ..schema.engine import SchemaViolation

_RED = Style(color="red")
_GREEN = Style(color="green")
_YELLOW = Style(color="yellow")
_BLUE = Style(color="blue")
_GRAY = Style(color="bright_black")


def get_error_message(error: SchemaViolation) -> str:
    """Single-line description of a violation, e.g. ``/category: ... (allowed: a, b)``."""
    message = f"{error.path}: {error.message}"

    if error.params:
        allowed = error.params.get('allowedValues')
        if allowed:
            message += f" (allowed: {', '.join(str(v) for v in allowed)})"
        limit = error.params.get('limit')
        if limit is not None:
            message += f" (limit: {limit})"

    return message


class ErrorFormatter:
    """Build colored ``rich.text.Text`` lines for the CLI."""

    def heading(self, label: str, detail: str = "", style: Style = _BLUE) -> Text:
        text = Text(label, style=style)
        if detail:
            text.append(f" {detail}")
        return text

    def format_file_valid(self) -> Text:
        return Text("✓ Valid LLM.yml file", style=_GREEN)

    def format_schema_failed(self) -> Text:
        return Text("✗ Schema Validation Failed:", style=_RED)

    def format_warnings_header(self) -> Text:
        return Text("⚠ Best Practice Warnings:", style=_YELLOW)

    def format_validation_error(
        self, error: SchemaViolation, location: Optional[SourceLocation] = None
    ) -> Text:
        text = Text("  ")
        text.append(error.path or '/', style=_YELLOW)
        source = format_source(location)
        if source:
            text.append(f" ({source})", style=_GRAY)
        text.append(f": {error.message}")

        if error.params:
            text.append("\n  ")
            text.append(f"Details: {json.dumps(error.params, default=str)}", style=_GRAY)

        return text

    def format_warning(self, warning: BestPracticeWarning) -> Text:
        severity = warning.severity or Severity.MINOR
        style = _YELLOW if severity == Severity.MODERATE else _GRAY

        text = Text("  ")
        text.append(f"[{severity.value}]", style=style)
        text.append(f" {warning.message}")
        return text

    def format_parse_error(self, error: ParseError) -> Text:
        text = Text("✗ YAML Parse Error:", style=_RED)
        text.append(f" {error.message}")

        if error.line is not None and error.column is not None:
            text.append("\n  ")
            text.append(f"at line {error.line}, column {error.column}", style=_GRAY)

        return text

    def format_notice(self, message: str) -> Text:
        return Text(message, style=_YELLOW)

    def format_error(self, message: str) -> Text:
        text = Text("✗ Error:", style=_RED)
        text.append(f" {message}")
        return text
