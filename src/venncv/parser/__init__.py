"""Document model and persistence."""

from venncv.parser.jsonfile import (
    dump_document,
    load_document,
    merge_documents,
    parse_document,
    save_document,
)
from venncv.parser.model import (
    Document,
    Field,
    Project,
    ProjectStatus,
    Relation,
    RelationType,
)

__all__ = [
    "Document",
    "Field",
    "Project",
    "ProjectStatus",
    "Relation",
    "RelationType",
    "dump_document",
    "load_document",
    "merge_documents",
    "parse_document",
    "save_document",
]
