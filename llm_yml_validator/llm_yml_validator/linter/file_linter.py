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

"""File-level checks for LLM.yml files.

These look at the raw input rather than the parsed document, so the caller
runs them and merges the result.
"""

from typing import Optional

from ..config.validator_config import ValidatorConfig, validator_config
from .report import BestPracticeWarning, Severity, WarningType


class FileLinter:
    """Linter for properties of the input file itself."""

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or validator_config

    def check_file_size(self, file_size: int) -> Optional[BestPracticeWarning]:
        """Check the size of an input file.

        Args:
            file_size: File size in bytes

        Returns:
            A warning if the file is larger than the configured limit
        """
        limit = self.config.max_file_size
        if file_size <= limit:
            return None

        size_kb = file_size / 1024
        return BestPracticeWarning(
            type=WarningType.FILE_SIZE,
            path='/',
            message=f'File size {size_kb:.1f}KB exceeds recommended {limit / 1024:g}KB',
            severity=Severity.MODERATE,
        )
