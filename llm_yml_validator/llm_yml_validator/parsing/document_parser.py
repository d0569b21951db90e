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

"""YAML/JSON document parser for LLM.yml files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from ..exceptions import LLMYmlFileError, ParseError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]

TOO_DEEP_MESSAGE = "Document nests too deeply"


def _key_to_str(key: Any) -> str:
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def stringify_keys(data: Any) -> Any:
    """Copy a parsed tree with every mapping key converted to a string.

    YAML allows keys such as ``404`` or ``true``; JSON Schema only knows
    string property names. Shared and self-referencing nodes stay shared.
    """
    if not isinstance(data, (dict, list)):
        return data

    copies: Dict[int, Any] = {id(data): {} if isinstance(data, dict) else []}
    stack = [data]
    while stack:
        node = stack.pop()
        target = copies[id(node)]
        items = node.items() if isinstance(node, dict) else enumerate(node)
        for key, value in items:
            if isinstance(value, (dict, list)):
                if id(value) not in copies:
                    copies[id(value)] = {} if isinstance(value, dict) else []
                    stack.append(value)
                value = copies[id(value)]
            if isinstance(target, dict):
                target[_key_to_str(key)] = value
            else:
                target.append(value)
    return copies[id(data)]


class DocumentParser:
    """Parse LLM.yml documents from files or strings.

    Files ending in ``.json`` are parsed as JSON, everything else as YAML.
    Apart from YAML keys becoming strings the parsed tree is returned as-is;
    shape checks belong to the schema.
    """

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def build_source_map(cls, content: str) -> SourceMap:
        """Build a mapping from JSON-pointer paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load. JSON input is
        composed the same way since it is (almost always) valid YAML.

        Raises:
            ParseError: If the document nests deeper than the composer can follow
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by load(); no locations then.
            return source_map
        except RecursionError as exc:
            raise ParseError(TOO_DEEP_MESSAGE) from exc

        if root is None:
            return source_map

        # Aliases share node objects (possibly cyclically); expand each collection once.
        expanded = set()
        stack = [(root, "")]
        while stack:
            node, path = stack.pop()
            mark = getattr(node, "start_mark", None)
            if mark is not None:
                # PyYAML uses 0-based line/column
                source_map[path or "/"] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

            if not isinstance(node, yaml.nodes.CollectionNode) or id(node) in expanded:
                continue
            expanded.add(id(node))

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    stack.append((value_node, f"{path}/{cls._json_pointer_escape(str(key))}"))
            else:
                for idx, item_node in enumerate(node.value):
                    stack.append((item_node, f"{path}/{idx}"))

        return source_map

    @staticmethod
    def _is_json(path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load_string(self, content: str, fmt: str = "yaml") -> Any:
        """Parse document content.

        Args:
            content: Raw document text
            fmt: ``"yaml"`` or ``"json"``

        Returns:
            The parsed document tree (``None`` for an empty YAML document);
            YAML mapping keys are converted to strings

        Raises:
            ParseError: If the content is not well-formed
        """
        if fmt == "json":
            try:
                return json.loads(content)
            except json.JSONDecodeError as exc:
                raise ParseError(exc.msg, line=exc.lineno, column=exc.colno) from exc
            except RecursionError as exc:
                raise ParseError(TOO_DEEP_MESSAGE) from exc

        try:
            return stringify_keys(yaml.safe_load(content))
        except RecursionError as exc:
            raise ParseError(TOO_DEEP_MESSAGE) from exc
        except yaml.MarkedYAMLError as exc:
            mark = exc.problem_mark or exc.context_mark
            line = mark.line + 1 if mark is not None else None
            column = mark.column + 1 if mark is not None else None
            message = exc.problem or str(exc)
            raise ParseError(message, line=line, column=column) from exc
        except yaml.YAMLError as exc:
            raise ParseError(str(exc)) from exc

    def read_text(self, file_path: Union[str, Path]) -> str:
        """Read a document file as UTF-8 text."""
        path = Path(file_path)

        if not path.exists():
            raise LLMYmlFileError(f"File not found: {path}")

        if not path.is_file():
            raise LLMYmlFileError(f"Path is not a file: {path}")

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LLMYmlFileError(f"Failed to read file {path}: {exc}") from exc

    def load(self, file_path: Union[str, Path]) -> Any:
        """Load and parse a document file.

        Raises:
            LLMYmlFileError: If the file cannot be read
            ParseError: If the content is not well-formed
        """
        path = Path(file_path)
        logger.debug(f"Loading document: {path}")
        content = self.read_text(path)
        return self.load_string(content, fmt="json" if self._is_json(path) else "yaml")

    def load_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a document file and return (data, source_map).

        source_map keys are JSON pointers (e.g. "/quick_usage/0/code").
        Values contain 1-based line/column.
        """
        path = Path(file_path)
        logger.debug(f"Loading document (with source): {path}")
        content = self.read_text(path)
        data = self.load_string(content, fmt="json" if self._is_json(path) else "yaml")
        return data, self.build_source_map(content)


# Global parser instance
document_parser = DocumentParser()
