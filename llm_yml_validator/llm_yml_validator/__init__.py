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

"""Schema and best-practice validation for LLM.yml metadata files."""

__version__ = "1.0.0"

# Schema version used when none is requested explicitly.
DEFAULT_SCHEMA_VERSION = "latest"

from .exceptions import LLMYmlError, ParseError, SchemaError, ValidationError  # noqa: E402
from .validation.validator import LLMYmlValidator, ValidationResult  # noqa: E402

__all__ = [
    "LLMYmlError",
    "LLMYmlValidator",
    "ParseError",
    "SchemaError",
    "ValidationError",
    "ValidationResult",
]
