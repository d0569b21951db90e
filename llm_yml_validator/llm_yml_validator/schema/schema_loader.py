# Copyright 2026 TIER IV, inc.
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

"""JSON Schema loader for LLM.yml validation."""

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Tuple, Union

from ..exceptions import SchemaError

logger = logging.getLogger(__name__)

SCHEMA_FILE_NAME = "llm.json"
LATEST = "latest"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_dir() -> Path:
    """Directory holding the versioned schema artifacts shipped with the package."""
    return Path(__file__).parent


def get_schema_path(version: str) -> Path:
    """Get the path to the schema file for the given version.

    Args:
        version: Schema version string (e.g., "1.0.0")

    Returns:
        Path to the schema file
    """
    return get_schema_dir() / version / SCHEMA_FILE_NAME


def _parse_version(raw: str) -> Tuple[int, int, int]:
    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise ValueError(f"Invalid schema version string: '{raw}'")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def available_versions() -> List[str]:
    """List shipped schema versions, oldest first."""
    versions = []
    for version_dir in get_schema_dir().iterdir():
        if not version_dir.is_dir() or not (version_dir / SCHEMA_FILE_NAME).exists():
            continue
        try:
            versions.append((_parse_version(version_dir.name), version_dir.name))
        except ValueError:
            # Skip directories that don't match the version pattern
            continue
    return [name for _, name in sorted(versions)]


def resolve_schema_version(version: str) -> str:
    """Resolve ``latest`` to the highest shipped version.

    Explicit versions are returned unchanged; whether they exist is checked
    when the schema is loaded.
    """
    if version != LATEST:
        return version

    versions = available_versions()
    if not versions:
        raise SchemaError(f"No schema versions found in {get_schema_dir()}")
    return versions[-1]


def load_schema_file(schema_path: Union[str, Path]) -> dict:
    """Load a JSON Schema document from an explicit file.

    Raises:
        SchemaError: If the file is missing, unreadable or not a JSON object
    """
    path = Path(schema_path)
    cache_key = str(path.resolve())
    if cache_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[cache_key]

    if not path.is_file():
        raise SchemaError(f"Schema file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON in schema file {path}: {e.msg} (line {e.lineno})") from e
    except OSError as e:
        raise SchemaError(f"Failed to read schema file {path}: {e}") from e

    if not isinstance(schema, dict):
        raise SchemaError(f"Schema file {path} must contain a JSON object")

    logger.debug(f"Loaded schema: {path}")
    _SCHEMA_CACHE[cache_key] = schema
    return schema


def load_schema(version: str = LATEST) -> dict:
    """Load the shipped schema for the given version.

    Args:
        version: Schema version string, or ``latest``

    Returns:
        Schema dictionary

    Raises:
        SchemaError: If no schema exists for the version or it is invalid JSON
    """
    resolved_version = resolve_schema_version(version)
    schema_path = get_schema_path(resolved_version)
    if not schema_path.exists():
        raise SchemaError(
            f"Schema file not found for version {version} "
            f"(resolved to {resolved_version}): {schema_path}"
        )
    return load_schema_file(schema_path)


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
