"""Validation orchestration and result formatting."""

from .validator import LLMYmlValidator, ValidationResult
from .error_formatter import ErrorFormatter, get_error_message

__all__ = ["ErrorFormatter", "LLMYmlValidator", "ValidationResult", "get_error_message"]
