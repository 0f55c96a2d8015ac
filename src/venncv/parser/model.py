"""Data model for research maps: fields, projects and relations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import networkx as nx


class ProjectStatus(Enum):
    """Progress state of a project. Values are the serialized names."""

    PUBLISHED = "Published"
    SUBMITTED = "Submitted"
    HIGH_PRIORITY = "HighPriority"
    STEADY_PROGRESS = "SteadyProgress"
    TO_BE_STARTED = "ToBeStarted"

    @property
    def display_name(self) -> str:
        return _STATUS_NAMES[self]

    @property
    def color(self) -> tuple[int, int, int]:
        return _STATUS_COLORS[self]


_STATUS_NAMES = {
    ProjectStatus.PUBLISHED: "Published",
    ProjectStatus.SUBMITTED: "Submitted",
    ProjectStatus.HIGH_PRIORITY: "High priority",
    ProjectStatus.STEADY_PROGRESS: "In progress",
    ProjectStatus.TO_BE_STARTED: "To be started",
}

_STATUS_COLORS = {
    ProjectStatus.PUBLISHED: (76, 175, 80),
    ProjectStatus.SUBMITTED: (33, 150, 243),
    ProjectStatus.HIGH_PRIORITY: (244, 67, 54),
    ProjectStatus.STEADY_PROGRESS: (255, 152, 0),
    ProjectStatus.TO_BE_STARTED: (255, 255, 255),
}


class RelationType(Enum):
    """Arrow style of a relation."""

    DIRECT = "Direct"  # solid arrow
    INDIRECT = "Indirect"  # dashed arrow


DEFAULT_RELATION_COLOR: tuple[int, int, int, int] = (0, 0, 0, 255)
DEFAULT_RELATION_WIDTH: float = 2.0
DEFAULT_PROJECT_RADIUS: float = 20.0
DEFAULT_FIELD_RADIUS: float = 200.0
DEFAULT_FIELD_CENTER: tuple[float, float] = (400.0, 400.0)


@dataclass
class Field:
    """A research field: a named circle on the canvas."""

    id: str
    name: str
    description: str = ""
    x: float = DEFAULT_FIELD_CENTER[0]
    y: float = DEFAULT_FIELD_CENTER[1]
    radius: float = DEFAULT_FIELD_RADIUS

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Project:
    """A project node. Position is populated by the layout core."""

    id: str
    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.TO_BE_STARTED
    field_ids: list[str] = field(default_factory=list)
    radius: float = DEFAULT_PROJECT_RADIUS
    completion: float = 0.0
    # Populated by layout engine
    x: float = 0.0
    y: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)

    def move_to(self, position: tuple[float, float]) -> None:
        self.x, self.y = position


@dataclass
class Relation:
    """A directed, styled edge between two projects.

    Either endpoint may name a project that does not exist (yet); such
    relations are kept but ignored by the layout core.
    """

    from_id: str
    to_id: str
    kind: RelationType = RelationType.DIRECT
    tags: list[str] = field(default_factory=list)
    color: tuple[int, int, int, int] = DEFAULT_RELATION_COLOR
    width: float = DEFAULT_RELATION_WIDTH


@dataclass
class Document:
    """Complete research map: the unit of layout and of undo snapshots."""

    fields: dict[str, Field] = field(default_factory=dict)
    projects: dict[str, Project] = field(default_factory=dict)
    relations: list[Relation] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    def add_field(self, fld: Field) -> None:
        self.fields[fld.id] = fld

    def new_field(self, name: str = "New field", description: str = "") -> Field:
        """Create a field with an auto id at the default centre and radius."""
        fld = Field(id=self._next_id("field", self.fields), name=name,
                    description=description)
        self.add_field(fld)
        return fld

    def remove_field(self, field_id: str) -> None:
        """Delete a field and drop it from every project's memberships."""
        for project in self.projects.values():
            project.field_ids = [fid for fid in project.field_ids if fid != field_id]
        self.fields.pop(field_id, None)

    def reorder_field(self, field_id: str, new_index: int) -> None:
        """Move a field to ``new_index`` in the field order."""
        if field_id not in self.fields:
            raise KeyError(field_id)
        items = list(self.fields.items())
        old_index = next(i for i, (fid, _) in enumerate(items) if fid == field_id)
        entry = items.pop(old_index)
        new_index = max(0, min(new_index, len(items)))
        items.insert(new_index, entry)
        self.fields = dict(items)

    def add_project(self, project: Project) -> None:
        self.projects[project.id] = project

    def new_project_id(self) -> str:
        return self._next_id("project", self.projects)

    def remove_project(self, project_id: str) -> None:
        """Delete a project together with every relation touching it."""
        self.projects.pop(project_id, None)
        self.relations = [
            r for r in self.relations
            if r.from_id != project_id and r.to_id != project_id
        ]

    def set_membership(self, project_id: str, field_id: str, member: bool) -> None:
        """Add or remove ``field_id`` from a project's memberships."""
        project = self.projects[project_id]
        if member:
            if field_id not in project.field_ids:
                project.field_ids.append(field_id)
        else:
            project.field_ids = [fid for fid in project.field_ids if fid != field_id]

    def add_relation(self, relation: Relation) -> None:
        self.relations.append(relation)
        for tag in relation.tags:
            self.add_tag(tag)

    def add_tag(self, tag: str) -> None:
        tag = tag.strip()
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def tag_relation(self, relation: Relation, tag: str) -> None:
        """Attach ``tag`` to a relation and register it in the vocabulary."""
        tag = tag.strip()
        if not tag:
            return
        if tag not in relation.tags:
            relation.tags.append(tag)
        self.add_tag(tag)

    def member_fields(self, project: Project) -> list[Field]:
        """Return the fields a project belongs to, skipping dangling ids."""
        result = []
        seen = set()
        for fid in project.field_ids:
            fld = self.fields.get(fid)
            if fld is not None and fid not in seen:
                result.append(fld)
                seen.add(fid)
        return result

    def projects_in_field(self, field_id: str) -> list[Project]:
        return [p for p in self.projects.values() if field_id in p.field_ids]

    def dangling_relations(self) -> list[Relation]:
        return [
            r for r in self.relations
            if r.from_id not in self.projects or r.to_id not in self.projects
        ]

    def relation_graph(self) -> nx.DiGraph:
        """Directed graph of relations whose endpoints both exist."""
        G = nx.DiGraph()
        G.add_nodes_from(self.projects)
        for relation in self.relations:
            if relation.from_id in self.projects and relation.to_id in self.projects:
                G.add_edge(relation.from_id, relation.to_id, relation=relation)
        return G

    @staticmethod
    def _next_id(prefix: str, existing: dict) -> str:
        n = len(existing) + 1
        while f"{prefix}_{n}" in existing:
            n += 1
        return f"{prefix}_{n}"
