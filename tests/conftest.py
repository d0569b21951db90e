"""Shared fixtures for the LLM.yml validator tests."""

import copy

import pytest
import yaml

from llm_yml_validator.config.validator_config import ValidatorConfig
from llm_yml_validator.schema import clear_cache, load_schema
from llm_yml_validator.validation.validator import LLMYmlValidator


COMPLETE_DOCUMENT = {
    "name": "example-lib",
    "version": "1.2.0",
    "description": "A small library for parsing example data files.",
    "category": "library",
    "language": "python",
    "quick_usage": [
        {
            "description": "Parse a file",
            "code": "import example\nexample.parse('data.txt')",
        },
        {
            "description": "Parse a string",
            "code": "example.loads('a=1')",
        },
    ],
    "common_patterns": [
        {
            "name": "Streaming",
            "code": "for item in example.stream(f):\n    handle(item)",
        },
    ],
    "error_handling": [
        {
            "error": "ParseError",
            "solution": "Check the input format",
            "example": "try:\n    example.parse(p)\nexcept example.ParseError:\n    pass",
        },
    ],
    "decision_tree": {
        "need_streaming": {
            "yes": "use stream()",
            "no": "use parse()",
        },
    },
}


def nested_tree(depth):
    """Build ``{"l1": {"l2": ... {"lN": 1}}}`` with the given nesting depth."""
    tree = 1
    for level in range(depth, 0, -1):
        tree = {f"l{level}": tree}
    return tree


def long_code(lines):
    return "\n".join(f"print({i})" for i in range(lines))


@pytest.fixture(autouse=True)
def _fresh_schema_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def schema():
    return load_schema()


@pytest.fixture
def config():
    return ValidatorConfig()


@pytest.fixture
def validator(schema, config):
    return LLMYmlValidator(schema, config=config)


@pytest.fixture
def document():
    """A schema-valid document that triggers no best-practice warnings."""
    return copy.deepcopy(COMPLETE_DOCUMENT)


@pytest.fixture
def minimal_document():
    """Only the required fields."""
    return {
        "name": "minimal",
        "version": "0.1.0",
        "description": "The smallest valid LLM.yml document.",
    }


@pytest.fixture
def write_yaml(tmp_path):
    def _write(data, name="LLM.yml", directory=None):
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write
