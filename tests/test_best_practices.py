"""Tests for the best-practice linter."""

import pytest

from llm_yml_validator.config.validator_config import ValidatorConfig
from llm_yml_validator.linter import (
    BestPracticesLinter,
    FileLinter,
    Severity,
    WarningType,
    get_tree_depth,
    lint_document,
)

from conftest import long_code, nested_tree


@pytest.fixture
def linter(config):
    return BestPracticesLinter(config)


def types_of(warnings):
    return [w.type for w in warnings]


class TestCompleteDocument:

    def test_no_warnings(self, linter, document):
        assert linter.check(document) == []

    def test_lint_document_helper(self, document):
        assert lint_document(document, ValidatorConfig()) == []


class TestCodeExampleLength:

    def test_long_usage_example(self, linter, document):
        document["quick_usage"][0]["code"] = long_code(25)
        warnings = linter.check(document)

        assert len(warnings) == 1
        warning = warnings[0]
        assert warning.type == WarningType.CODE_LENGTH
        assert warning.severity == Severity.MINOR
        assert warning.path == "quick_usage[0]"
        assert "25" in warning.message
        assert "20" in warning.message

    def test_long_pattern_example(self, linter, document):
        document["common_patterns"].append({"name": "Long", "code": long_code(30)})
        warnings = linter.check(document)
        assert [w.path for w in warnings] == ["common_patterns[1]"]

    def test_threshold_is_exclusive(self, linter, document):
        document["quick_usage"][1]["code"] = long_code(20)
        assert linter.check(document) == []

        document["quick_usage"][1]["code"] = long_code(21)
        assert [w.path for w in linter.check(document)] == ["quick_usage[1]"]

    def test_usage_examples_reported_before_patterns(self, linter, document):
        document["common_patterns"][0]["code"] = long_code(22)
        document["quick_usage"][1]["code"] = long_code(22)
        warnings = linter.check(document)
        assert [w.path for w in warnings] == ["quick_usage[1]", "common_patterns[0]"]

    def test_configured_threshold(self, document):
        linter = BestPracticesLinter(ValidatorConfig(max_code_lines=1))
        warnings = linter.check(document)
        assert "recommended: <1" in warnings[0].message


class TestRecommendedSections:

    def test_all_sections_missing(self, linter, minimal_document):
        warnings = linter.check(minimal_document)

        assert types_of(warnings) == [WarningType.MISSING_SECTION] * 3
        assert all(w.path == "/" for w in warnings)
        assert all(w.severity == Severity.MODERATE for w in warnings)
        assert [w.message for w in warnings] == [
            "Missing recommended section: decision_tree",
            "Missing recommended section: common_patterns",
            "Missing recommended section: error_handling",
        ]

    def test_one_section_missing(self, linter, document):
        del document["error_handling"]
        warnings = linter.check(document)
        assert [w.message for w in warnings] == ["Missing recommended section: error_handling"]

    def test_null_section_counts_as_missing(self, linter, document):
        document["decision_tree"] = None
        assert types_of(linter.check(document)) == [WarningType.MISSING_SECTION]


class TestUsageExamples:

    def test_single_example(self, linter, document):
        document["quick_usage"] = document["quick_usage"][:1]
        warnings = linter.check(document)

        assert types_of(warnings) == [WarningType.INSUFFICIENT_EXAMPLES]
        assert warnings[0].path == "quick_usage"
        assert warnings[0].severity == Severity.MINOR

    def test_empty_list(self, linter, document):
        document["quick_usage"] = []
        assert types_of(linter.check(document)) == [WarningType.INSUFFICIENT_EXAMPLES]

    def test_absent_section_not_reported(self, linter, document):
        del document["quick_usage"]
        assert linter.check(document) == []


class TestErrorHandling:

    def test_solution_without_example(self, linter, document):
        document["error_handling"].append({"error": "TimeoutError", "solution": "Retry the call"})
        warnings = linter.check(document)

        assert types_of(warnings) == [WarningType.MISSING_EXAMPLE]
        assert warnings[0].path == "error_handling[1]"
        assert warnings[0].severity == Severity.MINOR

    def test_solution_with_example(self, linter, document):
        assert linter.check(document) == []

    def test_no_solution(self, linter, document):
        document["error_handling"] = [{"error": "TimeoutError", "cause": "Slow network"}]
        assert linter.check(document) == []

    def test_one_warning_per_entry(self, linter, document):
        document["error_handling"] = [
            {"error": "A", "solution": "fix a"},
            {"error": "B", "solution": "fix b", "example": "b()"},
            {"error": "C", "solution": "fix c"},
        ]
        warnings = linter.check(document)
        assert [w.path for w in warnings] == ["error_handling[0]", "error_handling[2]"]


class TestDecisionTreeDepth:

    def test_depth_five_reported(self, linter, document):
        document["decision_tree"] = {"a": {"b": {"c": {"d": {"e": 1}}}}}
        warnings = linter.check(document)

        assert types_of(warnings) == [WarningType.DEEP_NESTING]
        assert warnings[0].path == "decision_tree"
        assert warnings[0].severity == Severity.MODERATE
        assert "5 levels" in warnings[0].message

    def test_depth_four_accepted(self, linter, document):
        document["decision_tree"] = {"a": {"b": {"c": {"d": 1}}}}
        assert linter.check(document) == []

    def test_deepest_branch_counts(self, linter, document):
        document["decision_tree"] = {"shallow": 1, "deep": nested_tree(6)}
        warnings = linter.check(document)
        assert "7 levels" in warnings[0].message


class TestTreeDepth:

    def test_scalar(self):
        assert get_tree_depth("leaf", max_depth=10) == 0

    def test_empty_mapping(self):
        assert get_tree_depth({}, max_depth=10) == 0

    def test_mapping_of_empty_mapping(self):
        assert get_tree_depth({"a": {}}, max_depth=10) == 1

    def test_lists_are_leaves(self):
        assert get_tree_depth({"a": [{"b": {"c": 1}}]}, max_depth=10) == 1

    def test_depth_is_bounded(self):
        assert get_tree_depth(nested_tree(50), max_depth=8) == 8

    def test_self_referencing_mapping_terminates(self):
        tree = {}
        tree["again"] = tree
        assert get_tree_depth(tree, max_depth=16) == 16

    def test_very_deep_tree(self):
        assert get_tree_depth(nested_tree(5000), max_depth=10000) == 5000


class TestRobustness:
    """The linter must not crash on valid-but-odd documents."""

    def test_empty_document(self, linter):
        assert types_of(linter.check({})) == [WarningType.MISSING_SECTION] * 3

    def test_non_mapping_document(self, linter):
        assert len(linter.check(None)) == 3

    def test_odd_entries_skipped(self, linter, document):
        document["quick_usage"] = [{"code": 5}, "plain string", {"description": "no code"}]
        document["error_handling"] = ["plain string"]
        document["decision_tree"] = ["not", "a", "mapping"]
        assert linter.check(document) == []

    def test_document_not_modified(self, linter, document):
        document["quick_usage"][0]["code"] = long_code(25)
        snapshot = repr(document)
        linter.check(document)
        assert repr(document) == snapshot


class TestCheckOrder:

    def test_warnings_follow_check_order(self, linter, document):
        document["quick_usage"] = [{"description": "long", "code": long_code(25)}]
        del document["common_patterns"]
        document["error_handling"] = [{"error": "E", "solution": "S"}]
        document["decision_tree"] = nested_tree(5)

        assert types_of(linter.check(document)) == [
            WarningType.CODE_LENGTH,
            WarningType.MISSING_SECTION,
            WarningType.INSUFFICIENT_EXAMPLES,
            WarningType.MISSING_EXAMPLE,
            WarningType.DEEP_NESTING,
        ]


class TestFileSize:

    @pytest.fixture
    def file_linter(self, config):
        return FileLinter(config)

    def test_large_file(self, file_linter):
        warning = file_linter.check_file_size(150 * 1024)

        assert warning.type == WarningType.FILE_SIZE
        assert warning.severity == Severity.MODERATE
        assert warning.path == "/"
        assert warning.message == "File size 150.0KB exceeds recommended 100KB"

    def test_small_file(self, file_linter):
        assert file_linter.check_file_size(50 * 1024) is None

    def test_limit_is_exclusive(self, file_linter):
        assert file_linter.check_file_size(100 * 1024) is None
        assert file_linter.check_file_size(100 * 1024 + 1) is not None

    def test_warning_serialises_enum_values(self, file_linter):
        assert file_linter.check_file_size(150 * 1024).to_dict() == {
            "type": "file_size",
            "path": "/",
            "message": "File size 150.0KB exceeds recommended 100KB",
            "severity": "moderate",
        }
