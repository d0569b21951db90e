# Copyright 2026 TIER IV, inc.
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

"""Custom exceptions for the LLM.yml validator."""

from typing import Any, List, Optional


class LLMYmlError(Exception):
    """Base exception for LLM.yml validator errors."""
    pass


class LLMYmlFileError(LLMYmlError):
    """Exception raised when an input file cannot be found or read."""
    pass


class ParseError(LLMYmlError):
    """Exception raised for malformed YAML/JSON input.

    ``line`` and ``column`` are 1-based when the parser reports a position.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class SchemaError(LLMYmlError):
    """Exception raised when the schema artifact itself is malformed."""

    def __init__(self, message: str, schema_path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.schema_path = schema_path


class ValidationError(LLMYmlError):
    """Exception raised for documents that fail schema validation.

    Only raised on request (see ``LLMYmlValidator.validate_or_raise``);
    regular validation returns violations as data.
    """

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else []
