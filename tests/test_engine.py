"""Tests for the layout coordinator entry points."""

import copy
import random

import pytest

from venncv.layout.engine import (
    add_field,
    compute_layout,
    end_drag,
    new_project,
    place_project,
    relax_and_validate,
    remove_field,
    reorder_field,
    reshuffle_layout,
    set_membership,
)
from venncv.layout.geometry import distance
from venncv.layout.regions import is_position_valid, is_valid_region
from venncv.parser.model import Document, Field, Project


def _make_two_field_doc():
    doc = Document()
    doc.add_field(Field(id="F1", name="One", x=0, y=0, radius=200))
    doc.add_field(Field(id="F2", name="Two", x=300, y=0, radius=200))
    return doc


def _make_mixed_doc():
    doc = _make_two_field_doc()
    for pid, field_ids in [
        ("a", ["F1"]),
        ("b", ["F1"]),
        ("c", ["F2"]),
        ("d", ["F1", "F2"]),
        ("e", []),
    ]:
        doc.add_project(Project(id=pid, name=pid.upper(), field_ids=field_ids))
    return doc


def _positions(doc):
    return {pid: p.center for pid, p in doc.projects.items()}


def _min_spacing(doc):
    projects = list(doc.projects.values())
    return min(
        distance(a.center, b.center)
        for i, a in enumerate(projects)
        for b in projects[i + 1:]
    )


def test_compute_layout_ten_projects_in_one_field():
    doc = Document()
    doc.add_field(Field(id="F1", name="One", x=400, y=200, radius=200))
    for i in range(10):
        doc.add_project(Project(id=f"p{i}", name=f"P{i}", field_ids=["F1"], radius=20))
    compute_layout(doc)
    for p in doc.projects.values():
        assert distance(p.center, (400, 200)) + 20 <= 195
    assert _min_spacing(doc) >= 55
    assert doc.fields["F1"].radius == 200


@pytest.mark.parametrize(
    "start",
    [
        lambda i: (400 + i, 200),
        lambda i: (330 + 35 * (i % 4), 150 + 35 * (i // 4)),
        lambda i: (400, 200),
    ],
    ids=["collinear", "grid", "stacked"],
)
def test_relax_and_validate_spreads_ten_projects(start):
    doc = Document()
    doc.add_field(Field(id="F1", name="One", x=400, y=200, radius=200))
    for i in range(10):
        x, y = start(i)
        doc.add_project(
            Project(id=f"p{i}", name=f"P{i}", field_ids=["F1"], radius=20, x=x, y=y)
        )
    assert relax_and_validate(doc)
    for p in doc.projects.values():
        assert distance(p.center, (400, 200)) + 20 <= 195
    assert _min_spacing(doc) >= 55
    assert doc.fields["F1"].radius == 200


def test_compute_layout_mixed_memberships():
    doc = _make_mixed_doc()
    compute_layout(doc)
    for p in doc.projects.values():
        assert is_valid_region(p, doc), p.id
    assert _min_spacing(doc) >= 55


def test_compute_layout_keeps_project_order():
    doc = _make_mixed_doc()
    compute_layout(doc)
    assert list(doc.projects) == ["a", "b", "c", "d", "e"]


def test_relax_and_validate_reports_change():
    doc = _make_two_field_doc()
    doc.add_project(Project(id="a", name="A", field_ids=["F2"], x=-100, y=0))
    assert relax_and_validate(doc)
    assert not relax_and_validate(doc)


def test_new_project_gets_id_and_valid_position():
    doc = _make_two_field_doc()
    first = new_project(doc, "First", ["F1", "F2"])
    second = new_project(doc, "Second", ["F1", "F2"], completion=40.0)
    assert first.id == "project_1"
    assert second.id == "project_2"
    assert second.completion == 40.0
    assert set(doc.projects) == {"project_1", "project_2"}
    for p in doc.projects.values():
        assert is_valid_region(p, doc)
    assert distance(first.center, second.center) >= 55


def test_new_project_balances_three_fields():
    doc = _make_two_field_doc()
    doc.add_field(Field(id="F3", name="Three"))
    new_project(doc, "Shared", ["F1", "F2", "F3"])
    xs = sorted(round(f.x) for f in doc.fields.values())
    # Balanced around the canvas centre
    assert xs[0] < 400 < xs[2]


def test_set_membership_moves_project_into_new_region():
    doc = _make_two_field_doc()
    p = Project(id="p", name="P", field_ids=["F1"], x=-100, y=0)
    doc.add_project(p)
    set_membership(doc, "p", "F2", True)
    assert p.field_ids == ["F1", "F2"]
    assert is_valid_region(p, doc)
    assert distance(p.center, (300, 0)) + p.radius <= 195

    set_membership(doc, "p", "F1", False)
    assert p.field_ids == ["F2"]
    assert is_valid_region(p, doc)
    assert distance(p.center, (0, 0)) >= 220


def test_add_field_places_at_default_center():
    doc = Document()
    fld = add_field(doc, "Ecology")
    assert fld.id == "field_1"
    assert fld.center == (400.0, 400.0)
    assert fld.radius == 200.0


def test_remove_field_cascades_and_relocates():
    doc = _make_two_field_doc()
    p = Project(id="p", name="P", field_ids=["F2"], x=150, y=0)
    doc.add_project(p)
    remove_field(doc, "F2")
    assert "F2" not in doc.fields
    assert p.field_ids == []
    assert distance(p.center, (0, 0)) >= 220


def test_reorder_field_rebalances():
    doc = Document()
    for fid in ("A", "B", "C"):
        doc.add_field(Field(id=fid, name=fid))
    doc.add_project(Project(id="p", name="P", field_ids=["C"]))
    reorder_field(doc, "C", 0)
    assert list(doc.fields) == ["C", "A", "B"]
    # First field sits at the top vertex
    assert doc.fields["C"].y < doc.fields["A"].y
    assert is_valid_region(doc.projects["p"], doc)


def test_end_drag_keeps_valid_drop_point():
    doc = _make_two_field_doc()
    p = Project(id="p", name="P", field_ids=["F1"], x=-100, y=0)
    doc.add_project(p)
    assert not end_drag(doc, "p", (-80, 60))
    assert p.center == (-80, 60)


def test_end_drag_corrects_invalid_drop_point():
    doc = _make_two_field_doc()
    p = Project(id="p", name="P", field_ids=["F1"], x=-100, y=0)
    doc.add_project(p)
    assert end_drag(doc, "p", (150, 0))
    assert is_valid_region(p, doc)


def test_end_drag_avoids_other_projects():
    doc = _make_two_field_doc()
    doc.add_project(Project(id="a", name="A", field_ids=["F1"], x=-100, y=0))
    p = Project(id="p", name="P", field_ids=["F1"], x=-100, y=120)
    doc.add_project(p)
    assert end_drag(doc, "p", (-100, 10))
    assert is_position_valid(p, doc)


def test_reshuffle_is_reproducible_with_seed():
    doc = _make_mixed_doc()
    compute_layout(doc)
    first = copy.deepcopy(doc)
    second = copy.deepcopy(doc)
    reshuffle_layout(first, random.Random(7))
    reshuffle_layout(second, random.Random(7))
    assert _positions(first) == _positions(second)
    for p in first.projects.values():
        assert is_valid_region(p, first), p.id


def test_reshuffle_without_jitter_is_valid():
    doc = _make_mixed_doc()
    reshuffle_layout(doc, random.Random(1), jitter=0.0)
    for p in doc.projects.values():
        assert is_valid_region(p, doc), p.id
    assert list(doc.projects) == ["a", "b", "c", "d", "e"]


def test_place_project_in_single_field():
    doc = Document()
    doc.add_field(Field(id="F1", name="One", x=400, y=200, radius=200))
    p = Project(id="P", name="P", field_ids=["F1"], radius=20)
    place_project(doc, p)
    assert doc.projects["P"] is p
    assert distance(p.center, (400, 200)) + p.radius <= 195
