import json

from todo_api.generate_openapi import generate_openapi


def test_writes_schema_with_routes_and_tags(tmp_path):
    out = generate_openapi(str(tmp_path / "interfaces" / "openapi.json"))
    with open(out, encoding="utf-8") as f:
        schema = json.load(f)

    assert "/toDos" in schema["paths"]
    assert set(schema["paths"]["/toDos"]) == {"get", "post"}
    assert set(schema["paths"]["/toDos/{todo_id}"]) == {"put", "delete"}
    assert {t["name"] for t in schema["tags"]} >= {"health", "todos"}
