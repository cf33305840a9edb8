"""JSON Schema export for snapback-events models.

Schemas are generated from the pydantic models on demand. Use
``python -m snapback_events.schemas.generate`` to write them to disk.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, TypeAdapter

from snapback_events.core import CORE_EVENT_MODELS, CoreEvent
from snapback_events.legacy import LEGACY_EVENT_MODELS, LegacyEvent
from snapback_events.models import (
    AIAssistLevel,
    AIProvider,
    IssueType,
    Outcome,
    PolicyLevel,
    ProtectionLevel,
    Resolution,
    Severity,
)
from snapback_events.triggers import Trigger

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_ID_PREFIX = "snapback-events"


def core_schema_name(event_type: str) -> str:
    """``save_attempt`` -> ``save_attempt_event``."""
    return f"{event_type}_event"


def legacy_schema_name(event_type: str) -> str:
    """``snapback.used`` -> ``legacy_snapback_used_event``."""
    return f"legacy_{event_type.replace('.', '_')}_event"


# Registry of models to generate schemas for
PYDANTIC_MODELS: List[Tuple[str, type]] = [
    *((core_schema_name(t), m) for t, m in sorted(CORE_EVENT_MODELS.items())),
    *((legacy_schema_name(t), m) for t, m in sorted(LEGACY_EVENT_MODELS.items())),
]

# Unions and enums (use TypeAdapter)
ADAPTED_TYPES: List[Tuple[str, Any]] = [
    ("core_event", CoreEvent),
    ("legacy_event", LegacyEvent),
    ("protection_level", ProtectionLevel),
    ("policy_level", PolicyLevel),
    ("severity", Severity),
    ("outcome", Outcome),
    ("issue_type", IssueType),
    ("resolution", Resolution),
    ("ai_assist_level", AIAssistLevel),
    ("ai_provider", AIProvider),
    ("trigger", Trigger),
]

_REGISTRY: Dict[str, Any] = {**dict(PYDANTIC_MODELS), **dict(ADAPTED_TYPES)}


def list_schemas() -> List[str]:
    """List all available schema names."""
    return sorted(_REGISTRY)


def build_schema(name: str) -> Dict[str, Any]:
    """Generate the JSON Schema for a registered model, union or enum.

    Args:
        name: Schema name as returned by :func:`list_schemas`.

    Returns:
        JSON Schema dict with ``$schema`` and ``$id`` fields.

    Raises:
        KeyError: If *name* is not registered.
    """
    if name not in _REGISTRY:
        raise KeyError(f"No schema named '{name}'. Available: {list_schemas()}")
    target = _REGISTRY[name]
    if isinstance(target, type) and issubclass(target, BaseModel):
        schema = target.model_json_schema(by_alias=True)
    else:
        adapter: TypeAdapter[Any] = TypeAdapter(target)
        schema = adapter.json_schema(by_alias=True)
    schema["$schema"] = SCHEMA_DIALECT
    schema["$id"] = f"{SCHEMA_ID_PREFIX}/{name}"
    return schema


def schema_to_json(schema: Dict[str, Any]) -> str:
    """Serialize schema to a deterministic JSON string with trailing newline."""
    return json.dumps(schema, indent=2, sort_keys=True) + "\n"
