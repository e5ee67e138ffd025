"""Test fixtures: sample entity metadata loaded from entities.json."""

from __future__ import annotations

import json
from pathlib import Path

from entityql.schema.columns import EntityMetadata

_FIXTURES_DIR = Path(__file__).parent


def load_entities() -> dict[str, EntityMetadata]:
    """Load every sample entity from entities.json, keyed by fixture name."""
    data = json.loads((_FIXTURES_DIR / "entities.json").read_text())
    return {key: EntityMetadata.model_validate(value) for key, value in data.items()}


def load_entity(name: str) -> EntityMetadata:
    """Return one sample entity.

    Args:
        name: ``'customer'``, ``'order'``, ``'order_line'`` or ``'audit_entry'``.
    """
    return load_entities()[name]
