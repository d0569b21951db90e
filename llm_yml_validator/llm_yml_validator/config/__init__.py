"""Validator configuration."""

from .validator_config import ValidatorConfig, validator_config

__all__ = ["ValidatorConfig", "validator_config"]
