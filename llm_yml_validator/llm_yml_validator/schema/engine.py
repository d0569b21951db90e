from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
from urllib.parse import unquote, urldefrag

from jsonschema import FormatChecker
from jsonschema.exceptions import SchemaError as JsonSchemaError
from jsonschema.exceptions import ValidationError as JsonValidationError
from jsonschema.validators import validator_for

from ..exceptions import SchemaError


JsonPointer = str

# Keywords whose values are plain data; "$ref" keys inside them are not references.
_DATA_KEYWORDS = frozenset({"enum", "const", "default", "examples"})

_COUNT_KEYWORDS = frozenset({
    "minLength",
    "maxLength",
    "minItems",
    "maxItems",
    "minProperties",
    "maxProperties",
    "minContains",
    "maxContains",
})

_COMPARISONS = {
    "minimum": ">=",
    "maximum": "<=",
    "exclusiveMinimum": ">",
    "exclusiveMaximum": "<",
}


@dataclass(frozen=True)
class SchemaViolation:
    """A single schema non-conformance.

    ``path`` points into the document ("/" for the root) and ``schema_path``
    into the schema ("#/properties/name/type").
    """

    path: JsonPointer
    message: str
    schema_path: str
    params: Optional[Dict[str, Any]] = None
    keyword: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "message": self.message,
            "schemaPath": self.schema_path,
        }
        if self.params:
            data["params"] = self.params
        return data


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _jp_unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def to_pointer(tokens: Iterable[Any]) -> JsonPointer:
    """Join path tokens into a JSON pointer; the empty path is "/"."""
    parts = [_jp_escape(str(t)) for t in tokens]
    if not parts:
        return "/"
    return "/" + "/".join(parts)


def to_schema_pointer(tokens: Iterable[Any]) -> str:
    return "#/" + "/".join(_jp_escape(str(t)) for t in tokens)


def _missing_property(error: JsonValidationError) -> Optional[str]:
    if not isinstance(error.instance, dict) or not isinstance(error.validator_value, list):
        return None
    missing = [p for p in error.validator_value if p not in error.instance]
    if not missing:
        return None
    # One error is produced per missing property, named at the start of the message.
    for prop in missing:
        if error.message.startswith(repr(prop)):
            return prop
    return missing[0]


def _additional_properties(error: JsonValidationError) -> List[str]:
    if not isinstance(error.instance, dict):
        return []
    declared = error.schema.get("properties", {}) if isinstance(error.schema, dict) else {}
    patterns = error.schema.get("patternProperties", {}) if isinstance(error.schema, dict) else {}
    extras = []
    for key in error.instance:
        if key in declared:
            continue
        if any(re.search(pattern, key) for pattern in patterns):
            continue
        extras.append(key)
    return extras


def build_params(error: JsonValidationError) -> Optional[Dict[str, Any]]:
    """Constraint metadata needed to describe a violation without the schema."""
    keyword = error.validator
    value = error.validator_value

    if keyword == "required":
        prop = _missing_property(error)
        return {"missingProperty": prop} if prop is not None else None
    if keyword == "enum":
        return {"allowedValues": list(value)}
    if keyword == "const":
        return {"allowedValue": value}
    if keyword == "type":
        return {"type": value}
    if keyword in _COUNT_KEYWORDS:
        return {"limit": value}
    if keyword in _COMPARISONS:
        return {"comparison": _COMPARISONS[keyword], "limit": value}
    if keyword == "multipleOf":
        return {"multipleOf": value}
    if keyword == "pattern":
        return {"pattern": value}
    if keyword == "format":
        return {"format": value}
    return None


def to_violations(error: JsonValidationError) -> List[SchemaViolation]:
    """Convert one jsonschema error into violations.

    jsonschema reports every unexpected property of an object in a single
    ``additionalProperties`` error; each name becomes its own violation.
    """
    path = to_pointer(error.absolute_path)
    schema_path = to_schema_pointer(error.absolute_schema_path)

    if error.validator == "additionalProperties":
        extras = _additional_properties(error)
        if extras:
            return [
                SchemaViolation(
                    path=path,
                    message=f"Additional properties are not allowed ({name!r} was unexpected)",
                    schema_path=schema_path,
                    params={"additionalProperty": name},
                    keyword=error.validator,
                )
                for name in extras
            ]

    return [
        SchemaViolation(
            path=path,
            message=error.message,
            schema_path=schema_path,
            params=build_params(error),
            keyword=error.validator,
        )
    ]


# -------------------------
# Reference checks
# -------------------------


def _iter_refs(node: Any, path: Tuple[Any, ...] = ()) -> Iterator[Tuple[str, Tuple[Any, ...]]]:
    """Yield every (``$ref`` value, location) pair in a schema document."""
    stack: List[Tuple[Any, Tuple[Any, ...]]] = [(node, path)]
    while stack:
        current, current_path = stack.pop()
        if isinstance(current, dict):
            ref = current.get("$ref")
            if isinstance(ref, str):
                yield ref, current_path + ("$ref",)
            for key, value in current.items():
                if key in _DATA_KEYWORDS:
                    continue
                stack.append((value, current_path + (key,)))
        elif isinstance(current, list):
            for idx, value in enumerate(current):
                stack.append((value, current_path + (idx,)))


def _collect_anchors(schema: Any) -> set:
    anchors = set()
    stack = [schema]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            anchor = current.get("$anchor")
            if isinstance(anchor, str):
                anchors.add(anchor)
            # draft-07 style plain-name fragments: {"$id": "#name"}
            schema_id = current.get("$id")
            if isinstance(schema_id, str) and schema_id.startswith("#"):
                anchors.add(schema_id[1:])
            stack.extend(v for k, v in current.items() if k not in _DATA_KEYWORDS)
        elif isinstance(current, list):
            stack.extend(current)
    return anchors


def _resolve_fragment(schema: Any, fragment: str) -> bool:
    node = schema
    for token in fragment.split("/")[1:]:
        token = _jp_unescape(unquote(token))
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            return False
    return True


def check_references(schema: Dict[str, Any]) -> None:
    """Verify that every ``$ref`` resolves inside the schema document.

    Raises:
        SchemaError: For remote references or fragments that do not resolve
    """
    schema_id = schema.get("$id")
    base_uri = urldefrag(schema_id).url if isinstance(schema_id, str) else ""
    anchors: Optional[set] = None

    for ref, location in _iter_refs(schema):
        uri, fragment = urldefrag(ref)
        if uri and uri != base_uri:
            raise SchemaError(
                f"Remote schema reference '{ref}' is not supported",
                schema_path=to_schema_pointer(location),
            )
        if not fragment:
            continue
        if fragment.startswith("/"):
            resolved = _resolve_fragment(schema, fragment)
        else:
            if anchors is None:
                anchors = _collect_anchors(schema)
            resolved = fragment in anchors
        if resolved:
            continue
        raise SchemaError(
            f"Unresolved schema reference '{ref}'",
            schema_path=to_schema_pointer(location),
        )


# -------------------------
# Compile / evaluate
# -------------------------


@dataclass(frozen=True)
class CompiledSchema:
    """A checked schema bound to a reusable validator.

    Immutable after construction; ``evaluate`` may be called any number of
    times, from any number of threads.
    """

    schema: Dict[str, Any]
    validator: Any = field(repr=False)

    @property
    def dialect(self) -> str:
        return type(self.validator).__name__

    def evaluate(self, document: Any) -> List[SchemaViolation]:
        """Validate a document, collecting every violation.

        Returns:
            List of SchemaViolation; empty when the document is valid

        Raises:
            SchemaError: If the engine fails on the schema itself
        """
        try:
            errors = list(self.validator.iter_errors(document))
        except JsonSchemaError as exc:
            raise SchemaError(
                f"Schema failed during evaluation: {exc.message}",
                schema_path=to_schema_pointer(exc.absolute_path),
            ) from exc
        except re.error as exc:
            raise SchemaError(f"Invalid regular expression in schema: {exc}") from exc
        return [violation for error in errors for violation in to_violations(error)]


def compile_schema(schema: Any) -> CompiledSchema:
    """Check a schema document and bind it to a validator.

    The dialect follows the schema's ``$schema`` keyword and falls back to
    the newest draft supported by jsonschema.

    Raises:
        SchemaError: If the schema is not a valid JSON Schema document
    """
    if not isinstance(schema, dict):
        raise SchemaError("Schema root must be a JSON object", schema_path="#/")

    validator_cls = validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except JsonSchemaError as exc:
        raise SchemaError(
            f"Invalid schema: {exc.message}",
            schema_path=to_schema_pointer(exc.absolute_path),
        ) from exc

    check_references(schema)

    return CompiledSchema(
        schema=schema,
        validator=validator_cls(schema, format_checker=FormatChecker()),
    )


def evaluate(compiled: CompiledSchema, document: Any) -> List[SchemaViolation]:
    """Validate ``document`` against ``compiled``; see ``CompiledSchema.evaluate``."""
    return compiled.evaluate(document)


def format_violations(violations: Sequence[SchemaViolation]) -> str:
    return "\n".join(
        f"  - {v.path}: {v.message}" for v in violations
    )
