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

"""Warning records produced by the best-practice linter."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Severity(str, Enum):
    """Importance of a best-practice warning."""

    MINOR = "minor"
    MODERATE = "moderate"


class WarningType(str, Enum):
    """Identifier of the check that produced a warning."""

    CODE_LENGTH = "code_length"
    MISSING_SECTION = "missing_section"
    INSUFFICIENT_EXAMPLES = "insufficient_examples"
    MISSING_EXAMPLE = "missing_example"
    DEEP_NESTING = "deep_nesting"
    FILE_SIZE = "file_size"


@dataclass(frozen=True)
class BestPracticeWarning:
    """Advisory observation about a schema-valid document.

    Warnings never affect validity.
    """

    type: WarningType
    path: str
    message: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'path': self.path,
            'message': self.message,
            'severity': self.severity.value,
        }
