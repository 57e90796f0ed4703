"""
Utility script to generate and write the OpenAPI schema for the service.

The app is built against the in-memory backend with seeding disabled, so
no database or log file is touched. The schema goes to
<container_root>/interfaces/openapi.json.

Usage:
    python -m todo_api.generate_openapi
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

from .main import create_app, openapi_tags
from .repositories import InMemoryRepository
from .settings import Settings


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Add any tag from openapi_tags missing in the schema's tag metadata.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


def _default_output_path() -> str:
    src_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    container_root = os.path.dirname(src_dir)
    return os.path.join(container_root, "interfaces", "openapi.json")


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """Write the OpenAPI schema file and return its path."""
    settings = Settings(persistence_backend="memory", seed_on_empty=False, log_file=os.devnull)
    app = create_app(settings, repository=InMemoryRepository())
    schema = app.openapi()
    _ensure_tags(schema)

    out_path = out_path or _default_output_path()
    os.makedirs(os.path.dirname(out_path), exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return out_path


def main() -> None:
    path = generate_openapi()
    print(f"Wrote OpenAPI schema to: {path}")


if __name__ == "__main__":
    main()
