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

"""Configuration management for the LLM.yml validator."""

import os
import logging
from dataclasses import dataclass

from ..utils.logging_utils import configure_split_stream_logging


@dataclass
class ValidatorConfig:
    """Thresholds for the best-practice checks plus logging settings."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"

    # best-practice thresholds
    max_code_lines: int = 20
    min_usage_examples: int = 2
    max_decision_tree_depth: int = 4
    max_file_size_kb: int = 100

    # hard limit for decision tree traversal
    max_traversal_depth: int = 256

    @property
    def max_file_size(self) -> int:
        """File size threshold in bytes."""
        return self.max_file_size_kb * 1024

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('LLM_YML_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('LLM_YML_PRINT_LEVEL', 'WARNING'),
            max_code_lines=int(os.getenv('LLM_YML_MAX_CODE_LINES', '20')),
            min_usage_examples=int(os.getenv('LLM_YML_MIN_USAGE_EXAMPLES', '2')),
            max_decision_tree_depth=int(os.getenv('LLM_YML_MAX_DECISION_TREE_DEPTH', '4')),
            max_file_size_kb=int(os.getenv('LLM_YML_MAX_FILE_SIZE_KB', '100')),
            max_traversal_depth=int(os.getenv('LLM_YML_MAX_TRAVERSAL_DEPTH', '256')),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name='llm_yml_validator',
        )


# Global configuration instance
validator_config = ValidatorConfig.from_env()
