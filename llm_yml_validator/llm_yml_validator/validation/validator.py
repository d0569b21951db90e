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

"""Validation of LLM.yml documents: schema first, then best practices."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config.validator_config import ValidatorConfig, validator_config
from ..exceptions import ValidationError
from ..linter.best_practices import BestPracticesLinter
from ..linter.file_linter import FileLinter
from ..linter.report import BestPracticeWarning
from ..parsing.document_parser import document_parser
from ..schema.engine import CompiledSchema, SchemaViolation, compile_schema, format_violations
from ..schema.schema_loader import LATEST, load_schema

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating one document.

    ``valid`` is derived from ``errors``; linter warnings are only present
    when the document passed the schema.
    """

    errors: List[SchemaViolation] = field(default_factory=list)
    warnings: List[BestPracticeWarning] = field(default_factory=list)
    file_path: Optional[Path] = None
    source_map: Optional[Dict[str, Dict[str, int]]] = field(default=None, repr=False, compare=False)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_warning(self, warning: Optional[BestPracticeWarning]) -> None:
        """Append a caller-side warning (e.g. the file-size check); ``None`` is ignored."""
        if warning is not None:
            self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'valid': self.valid,
            'errors': [e.to_dict() for e in self.errors],
            'warnings': [w.to_dict() for w in self.warnings],
        }
        if self.file_path is not None:
            data['file'] = str(self.file_path)
        return data


class LLMYmlValidator:
    """Validate parsed LLM.yml documents against a compiled schema.

    The schema is compiled once in the constructor and reused for every
    document, so one instance can serve a whole directory run.
    """

    def __init__(
        self,
        schema: Union[Dict[str, Any], CompiledSchema],
        config: Optional[ValidatorConfig] = None,
        best_practices: bool = True,
    ):
        """Initialize the validator.

        Args:
            schema: JSON Schema document or an already compiled schema
            config: Thresholds for the best-practice checks
            best_practices: Run the best-practice linter on valid documents

        Raises:
            SchemaError: If the schema document is invalid
        """
        self.config = config or validator_config
        self.compiled = schema if isinstance(schema, CompiledSchema) else compile_schema(schema)
        self.best_practices_enabled = best_practices
        self.best_practices = BestPracticesLinter(self.config)
        self.file_linter = FileLinter(self.config)
        logger.debug(f"Compiled schema with {self.compiled.dialect}")

    @classmethod
    def from_version(cls, version: str = LATEST, **kwargs) -> 'LLMYmlValidator':
        """Create a validator for a schema version shipped with the package."""
        return cls(load_schema(version), **kwargs)

    def validate(self, data: Any) -> ValidationResult:
        """Validate a parsed document.

        Args:
            data: Parsed YAML/JSON document

        Returns:
            ValidationResult; warnings are only collected for schema-valid documents
        """
        result = ValidationResult()

        violations = self.compiled.evaluate(data)
        if violations:
            logger.debug(f"Schema validation found {len(violations)} violation(s)")
            result.errors = violations
            return result

        if self.best_practices_enabled:
            result.warnings = self.best_practices.check(data)

        return result

    def validate_or_raise(self, data: Any) -> ValidationResult:
        """Validate a parsed document, raising on schema violations.

        Raises:
            ValidationError: If the document does not satisfy the schema
        """
        result = self.validate(data)
        if not result.valid:
            details = format_violations(result.errors)
            raise ValidationError(f"Schema validation failed:\n{details}", errors=result.errors)
        return result

    def check_file_size(self, file_size: int) -> Optional[BestPracticeWarning]:
        """Return the file-size warning for an input of ``file_size`` bytes, if any."""
        return self.file_linter.check_file_size(file_size)

    def validate_file(self, file_path: Union[str, Path]) -> ValidationResult:
        """Load, parse and validate a file.

        The file-size warning is merged into the result of a schema-valid
        document when best-practice checks are enabled; invalid documents
        carry errors only.

        Raises:
            LLMYmlFileError: If the file cannot be read
            ParseError: If the file is not well-formed YAML/JSON
        """
        path = Path(file_path)
        data, source_map = document_parser.load_with_source(path)

        result = self.validate(data)
        result.file_path = path
        result.source_map = source_map
        if result.valid and self.best_practices_enabled:
            result.add_warning(self.check_file_size(path.stat().st_size))
        return result
