"""Schema loading and evaluation.

The schema artifacts live next to this package as ``<version>/llm.json``.
Evaluation is delegated to jsonschema; this package only normalizes the
results into ``SchemaViolation`` records.
"""

from .engine import (
    CompiledSchema,
    SchemaViolation,
    compile_schema,
    evaluate,
)
from .schema_loader import (
    clear_cache,
    load_schema,
    load_schema_file,
    resolve_schema_version,
)
