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

"""Best-practice linter package for LLM.yml documents."""

from typing import Any, Dict, List, Optional

from ..config.validator_config import ValidatorConfig
from .report import BestPracticeWarning, Severity, WarningType
from .best_practices import BestPracticesLinter, get_tree_depth
from .file_linter import FileLinter

__all__ = [
    'BestPracticeWarning',
    'BestPracticesLinter',
    'FileLinter',
    'Severity',
    'WarningType',
    'get_tree_depth',
    'lint_document',
]


def lint_document(data: Dict[str, Any], config: Optional[ValidatorConfig] = None) -> List[BestPracticeWarning]:
    """Run the best-practice checks on a schema-valid document.

    Args:
        data: Parsed LLM.yml document
        config: Optional thresholds; defaults to the environment configuration

    Returns:
        List of warnings in check order
    """
    return BestPracticesLinter(config).check(data)
