"""Tests for configuration and logging setup."""

import logging

import pytest

from llm_yml_validator.config.validator_config import ValidatorConfig
from llm_yml_validator.utils.logging_utils import configure_split_stream_logging


class TestValidatorConfig:

    def test_defaults(self):
        config = ValidatorConfig()
        assert config.max_code_lines == 20
        assert config.min_usage_examples == 2
        assert config.max_decision_tree_depth == 4
        assert config.max_file_size == 100 * 1024

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LLM_YML_MAX_CODE_LINES", "30")
        monkeypatch.setenv("LLM_YML_MAX_FILE_SIZE_KB", "8")
        monkeypatch.setenv("LLM_YML_LOG_LEVEL", "DEBUG")

        config = ValidatorConfig.from_env()

        assert config.max_code_lines == 30
        assert config.max_file_size == 8 * 1024
        assert config.log_level == "DEBUG"
        assert config.max_decision_tree_depth == 4

    def test_from_env_rejects_non_numeric_threshold(self, monkeypatch):
        monkeypatch.setenv("LLM_YML_MAX_CODE_LINES", "many")
        with pytest.raises(ValueError):
            ValidatorConfig.from_env()


class TestSplitStreamLogging:

    @pytest.fixture
    def logger_name(self):
        name = "llm_yml_validator.tests.split"
        logging.getLogger(name).propagate = False
        yield name
        logging.getLogger(name).handlers.clear()

    def test_levels_routed_by_stream(self, logger_name, capsys):
        logger = configure_split_stream_logging(
            level=logging.DEBUG,
            stderr_level=logging.WARNING,
            formatter=logging.Formatter("%(levelname)s %(message)s"),
            logger_name=logger_name,
        )
        logger.info("scanning")
        logger.warning("slow schema")

        captured = capsys.readouterr()
        assert "INFO scanning" in captured.out
        assert "slow schema" not in captured.out
        assert "WARNING slow schema" in captured.err

    def test_reconfiguring_replaces_handlers(self, logger_name):
        configure_split_stream_logging(logger_name=logger_name)
        logger = configure_split_stream_logging(logger_name=logger_name)
        assert len(logger.handlers) == 2

    def test_config_sets_package_logger(self):
        logger = ValidatorConfig(log_level="INFO").set_logging()
        try:
            assert logger.name == "llm_yml_validator"
            assert logger.level == logging.INFO
        finally:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)
