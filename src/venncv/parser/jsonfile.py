"""JSON persistence for research map documents.

The on-disk layout mirrors the desktop application's data files: fields
and projects are objects keyed by id, positions are ``[x, y]`` pairs and
enums are stored by variant name.
"""

from __future__ import annotations

import json
from pathlib import Path

from venncv.parser.model import (
    DEFAULT_FIELD_RADIUS,
    DEFAULT_PROJECT_RADIUS,
    DEFAULT_RELATION_COLOR,
    DEFAULT_RELATION_WIDTH,
    Document,
    Field,
    Project,
    ProjectStatus,
    Relation,
    RelationType,
)


def parse_document(text: str) -> Document:
    """Parse a JSON document string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON at line {e.lineno}: {e.msg}") from e

    if not isinstance(data, dict):
        raise ValueError("Document root must be a JSON object")

    doc = Document()
    for fid, raw in _mapping(data, "fields").items():
        doc.add_field(_parse_field(fid, raw))
    for pid, raw in _mapping(data, "projects").items():
        doc.add_project(_parse_project(pid, raw))

    relations = data.get("relations", [])
    if not isinstance(relations, list):
        raise ValueError("'relations' must be a list")
    for raw in relations:
        doc.add_relation(_parse_relation(raw))

    for tag in _list(data, "relation_tags", "Document"):
        doc.add_tag(str(tag))
    return doc


def load_document(path: Path | str) -> Document:
    return parse_document(Path(path).read_text(encoding="utf-8"))


def dump_document(doc: Document) -> str:
    """Serialize a document to a JSON string."""
    data = {
        "fields": {
            fid: {
                "id": f.id,
                "name": f.name,
                "description": f.description,
                "position": [f.x, f.y],
                "radius": f.radius,
            }
            for fid, f in doc.fields.items()
        },
        "projects": {
            pid: {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "status": p.status.value,
                "field_ids": list(p.field_ids),
                "position": [p.x, p.y],
                "radius": p.radius,
                "completion_percentage": p.completion,
            }
            for pid, p in doc.projects.items()
        },
        "relations": [
            {
                "from_id": r.from_id,
                "to_id": r.to_id,
                "relation_type": r.kind.value,
                "tags": list(r.tags),
                "color": list(r.color),
                "width": r.width,
            }
            for r in doc.relations
        ],
        "relation_tags": list(doc.tags),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def save_document(doc: Document, path: Path | str) -> None:
    Path(path).write_text(dump_document(doc) + "\n", encoding="utf-8")


def merge_documents(base: Document, incoming: Document) -> Document:
    """Merge ``incoming`` into ``base`` in place (import action).

    Fields and projects are added or replaced by id. Relations are
    appended unless one already links the same (from, to) pair.
    """
    for project in incoming.projects.values():
        base.add_project(project)
    for fld in incoming.fields.values():
        base.add_field(fld)
    existing = {(r.from_id, r.to_id) for r in base.relations}
    for relation in incoming.relations:
        if (relation.from_id, relation.to_id) not in existing:
            base.add_relation(relation)
            existing.add((relation.from_id, relation.to_id))
    for tag in incoming.tags:
        base.add_tag(tag)
    return base


def _mapping(data: dict, key: str) -> dict:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be an object keyed by id")
    return value


def _number(value, key: str, owner: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{owner}: '{key}' must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{owner}: '{key}' must be a number") from None


def _list(raw: dict, key: str, owner: str) -> list:
    value = raw.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"{owner}: '{key}' must be a list")
    return value


def _position(raw: dict, owner: str) -> tuple[float, float]:
    pos = raw.get("position", [0.0, 0.0])
    if not isinstance(pos, (list, tuple)) or len(pos) != 2:
        raise ValueError(f"{owner}: 'position' must be a [x, y] pair")
    return _number(pos[0], "position", owner), _number(pos[1], "position", owner)


def _parse_field(fid: str, raw: dict) -> Field:
    if not isinstance(raw, dict):
        raise ValueError(f"Field '{fid}' must be an object")
    x, y = _position(raw, f"Field '{fid}'")
    return Field(
        id=str(raw.get("id", fid)),
        name=str(raw.get("name", fid)),
        description=str(raw.get("description", "")),
        x=x,
        y=y,
        radius=_number(raw.get("radius", DEFAULT_FIELD_RADIUS), "radius", f"Field '{fid}'"),
    )


def _parse_project(pid: str, raw: dict) -> Project:
    if not isinstance(raw, dict):
        raise ValueError(f"Project '{pid}' must be an object")
    status_name = raw.get("status", ProjectStatus.TO_BE_STARTED.value)
    try:
        status = ProjectStatus(status_name)
    except ValueError:
        raise ValueError(f"Project '{pid}' has unknown status '{status_name}'") from None
    owner = f"Project '{pid}'"
    x, y = _position(raw, owner)
    completion = _number(raw.get("completion_percentage", 0.0), "completion_percentage", owner)
    return Project(
        id=str(raw.get("id", pid)),
        name=str(raw.get("name", pid)),
        description=str(raw.get("description", "")),
        status=status,
        field_ids=[str(fid) for fid in _list(raw, "field_ids", owner)],
        radius=_number(raw.get("radius", DEFAULT_PROJECT_RADIUS), "radius", owner),
        completion=min(max(completion, 0.0), 100.0),
        x=x,
        y=y,
    )


def _parse_relation(raw: dict) -> Relation:
    if not isinstance(raw, dict):
        raise ValueError("Each relation must be an object")
    kind_name = raw.get("relation_type", RelationType.DIRECT.value)
    try:
        kind = RelationType(kind_name)
    except ValueError:
        raise ValueError(f"Unknown relation type '{kind_name}'") from None
    from_id = str(raw.get("from_id", ""))
    to_id = str(raw.get("to_id", ""))
    owner = f"Relation '{from_id}' -> '{to_id}'"
    color = raw.get("color", list(DEFAULT_RELATION_COLOR))
    if not isinstance(color, (list, tuple)) or len(color) != 4:
        raise ValueError(f"{owner}: 'color' must be an RGBA list of 4 bytes")
    return Relation(
        from_id=from_id,
        to_id=to_id,
        kind=kind,
        tags=[str(t) for t in _list(raw, "tags", owner)],
        color=tuple(int(_number(c, "color", owner)) for c in color),
        width=_number(raw.get("width", DEFAULT_RELATION_WIDTH), "width", owner),
    )
