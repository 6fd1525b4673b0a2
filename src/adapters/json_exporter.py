"""JSON export of domain entities.

Why JSON:
- Interoperability with other tools and scripts (``arena ... --json | jq``).
- Stable formatting: sorted keys, UTF-8, trailing newline.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel


def entities_to_json(entities: BaseModel | Sequence[BaseModel]) -> str:
    """Serialize one entity or a list of entities to formatted JSON."""

    if isinstance(entities, BaseModel):
        payload: object = entities.model_dump(mode="json")
    else:
        payload = [entity.model_dump(mode="json") for entity in entities]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_entities_json(*, entities: BaseModel | Sequence[BaseModel], output_path: Path) -> Path:
    """Write ``entities`` as UTF-8 JSON to ``output_path``."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(entities_to_json(entities), encoding="utf-8")
    return output_path
