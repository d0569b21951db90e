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

"""Best-practice linter for schema-valid LLM.yml documents.

The schema guarantees the overall shape of a document; the checks here
cover style and content weaknesses it cannot express. Every check is
independent and tolerates absent optional sections.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config.validator_config import ValidatorConfig, validator_config
from .report import BestPracticeWarning, Severity, WarningType

logger = logging.getLogger(__name__)


def get_tree_depth(tree: Any, max_depth: int) -> int:
    """Nesting depth of a tree of mappings.

    The root mapping is level 0 and each step from a mapping into one of its
    values adds one level. Lists and scalars are leaves. Traversal never goes
    below ``max_depth``, so recursive or adversarial input terminates.
    """
    if not isinstance(tree, dict):
        return 0

    deepest = 0
    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        child_depth = depth + 1
        for value in node.values():
            deepest = max(deepest, child_depth)
            if isinstance(value, dict) and child_depth < max_depth:
                stack.append((value, child_depth))
    return deepest


class BestPracticesLinter:
    """Linter for LLM.yml content conventions."""

    CODE_SECTIONS = ('quick_usage', 'common_patterns')
    RECOMMENDED_SECTIONS = ('decision_tree', 'common_patterns', 'error_handling')

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or validator_config

    def check(self, data: Dict[str, Any]) -> List[BestPracticeWarning]:
        """Run all checks on a schema-valid document.

        Args:
            data: Parsed LLM.yml document

        Returns:
            Warnings in check order
        """
        if not isinstance(data, dict):
            data = {}

        warnings: List[BestPracticeWarning] = []

        self.check_code_example_length(data, warnings)
        self.check_recommended_sections(data, warnings)
        self.check_quick_usage_examples(data, warnings)
        self.check_error_handling(data, warnings)
        self.check_decision_tree_depth(data, warnings)

        logger.debug(f"Best-practice checks produced {len(warnings)} warning(s)")
        return warnings

    def check_code_example_length(self, data: Dict[str, Any], warnings: List[BestPracticeWarning]):
        limit = self.config.max_code_lines
        for section in self.CODE_SECTIONS:
            entries = data.get(section)
            if not isinstance(entries, list):
                continue
            for idx, entry in enumerate(entries):
                if not isinstance(entry, dict) or not isinstance(entry.get('code'), str):
                    continue
                lines = len(entry['code'].split('\n'))
                if lines > limit:
                    warnings.append(BestPracticeWarning(
                        type=WarningType.CODE_LENGTH,
                        path=f'{section}[{idx}]',
                        message=f'Code example has {lines} lines (recommended: <{limit})',
                        severity=Severity.MINOR,
                    ))

    def check_recommended_sections(self, data: Dict[str, Any], warnings: List[BestPracticeWarning]):
        for section in self.RECOMMENDED_SECTIONS:
            if data.get(section) is None:
                warnings.append(BestPracticeWarning(
                    type=WarningType.MISSING_SECTION,
                    path='/',
                    message=f'Missing recommended section: {section}',
                    severity=Severity.MODERATE,
                ))

    def check_quick_usage_examples(self, data: Dict[str, Any], warnings: List[BestPracticeWarning]):
        quick_usage = data.get('quick_usage')
        if isinstance(quick_usage, list) and len(quick_usage) < self.config.min_usage_examples:
            warnings.append(BestPracticeWarning(
                type=WarningType.INSUFFICIENT_EXAMPLES,
                path='quick_usage',
                message='Consider adding more usage examples (recommended: 2-4)',
                severity=Severity.MINOR,
            ))

    def check_error_handling(self, data: Dict[str, Any], warnings: List[BestPracticeWarning]):
        entries = data.get('error_handling')
        if not isinstance(entries, list):
            return
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                continue
            # An empty example counts as missing.
            if entry.get('solution') and not entry.get('example'):
                warnings.append(BestPracticeWarning(
                    type=WarningType.MISSING_EXAMPLE,
                    path=f'error_handling[{idx}]',
                    message='Consider adding a code example for this error solution',
                    severity=Severity.MINOR,
                ))

    def check_decision_tree_depth(self, data: Dict[str, Any], warnings: List[BestPracticeWarning]):
        tree = data.get('decision_tree')
        if tree is None:
            return
        limit = self.config.max_decision_tree_depth
        depth = get_tree_depth(tree, self.config.max_traversal_depth)
        if depth > limit:
            warnings.append(BestPracticeWarning(
                type=WarningType.DEEP_NESTING,
                path='decision_tree',
                message=f'Decision tree has {depth} levels of nesting (recommended: ≤{limit})',
                severity=Severity.MODERATE,
            ))
