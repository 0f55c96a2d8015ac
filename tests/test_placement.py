"""Tests for the placement search."""

import pytest

from venncv.layout.geometry import closest_point_on_segment, distance
from venncv.layout.placement import (
    find_position,
    intersection_anchor,
    nearest_region_valid_position,
    nearest_valid_position,
)
from venncv.layout.regions import is_clear_of_projects, is_valid_region
from venncv.parser.model import Document, Field, Project, Relation


def _make_single_field_doc():
    doc = Document()
    doc.add_field(Field(id="F1", name="One", x=400, y=200, radius=200))
    return doc


def _make_two_field_doc():
    doc = Document()
    doc.add_field(Field(id="F1", name="One", x=0, y=0, radius=200))
    doc.add_field(Field(id="F2", name="Two", x=300, y=0, radius=200))
    return doc


# --- One field ---


def test_single_field_placement_inside_with_margin():
    doc = _make_single_field_doc()
    p = Project(id="P", name="P", field_ids=["F1"], radius=20)
    pos = find_position(p, doc)
    assert distance(pos, (400, 200)) + 20 <= 195


def test_single_field_prefers_side_away_from_other_fields():
    doc = _make_two_field_doc()
    p = Project(id="P", name="P", field_ids=["F1"])
    pos = find_position(p, doc)
    assert is_valid_region(p, doc, pos)
    assert pos[0] < -100


def test_single_field_placement_avoids_existing_projects():
    doc = _make_single_field_doc()
    for i in range(4):
        p = Project(id=f"p{i}", name=f"P{i}", field_ids=["F1"])
        p.move_to(find_position(p, doc))
        doc.add_project(p)
    projects = list(doc.projects.values())
    for i, a in enumerate(projects):
        assert is_valid_region(a, doc)
        for b in projects[i + 1:]:
            assert distance(a.center, b.center) >= 55


def test_single_field_placement_avoids_unrelated_arrows():
    doc = Document()
    doc.add_field(Field(id="F", name="F", x=0, y=0, radius=200))
    doc.add_project(Project(id="a", name="A", field_ids=["F"], x=-150, y=0))
    doc.add_project(Project(id="b", name="B", field_ids=["F"], x=150, y=0))
    doc.add_relation(Relation(from_id="a", to_id="b"))

    c = Project(id="c", name="C", field_ids=["F"])
    pos = find_position(c, doc)
    on_arrow = closest_point_on_segment(pos, (-150, 0), (150, 0))
    assert distance(pos, on_arrow) >= 45


def test_field_too_small_falls_back_to_center():
    doc = Document()
    doc.add_field(Field(id="F", name="F", x=10, y=20, radius=20))
    p = Project(id="p", name="P", field_ids=["F"], radius=20)
    assert find_position(p, doc) == (10, 20)


# --- Two or more fields ---


def test_two_field_placement_in_intersection():
    doc = _make_two_field_doc()
    p = Project(id="P", name="P", field_ids=["F1", "F2"], radius=20)
    pos = find_position(p, doc)
    assert distance(pos, (0, 0)) + 20 <= 195
    assert distance(pos, (300, 0)) + 20 <= 195


def test_intersection_excludes_third_field():
    doc = _make_two_field_doc()
    doc.add_field(Field(id="F3", name="Three", x=150, y=260, radius=200))
    p = Project(id="P", name="P", field_ids=["F1", "F2"])
    pos = find_position(p, doc)
    assert is_valid_region(p, doc, pos)
    assert distance(pos, (150, 260)) >= 220


def test_intersection_anchor_starts_at_centroid():
    doc = _make_two_field_doc()
    p = Project(id="P", name="P", field_ids=["F1", "F2"])
    anchor = intersection_anchor(p, list(doc.fields.values()), [])
    assert anchor == pytest.approx((150, 0))


def test_intersection_anchor_pulls_into_targets():
    far = [
        Field(id="A", name="A", x=0, y=0, radius=200),
        Field(id="B", name="B", x=340, y=0, radius=200),
    ]
    p = Project(id="P", name="P", field_ids=["A", "B"])
    near = [Field(id="C", name="C", x=170, y=-200, radius=200)]
    anchor = intersection_anchor(p, far, near)
    # Pushed away from C, so below the centroid
    assert anchor[1] > 0


# --- Zero fields ---


def test_zero_fields_placed_outside_all_fields():
    doc = _make_single_field_doc()
    p = Project(id="P", name="P", field_ids=[])
    pos = find_position(p, doc)
    # Right of the fields' bounding box: 400 + 200 + gap 20 + radius 20
    assert pos == pytest.approx((640, 200))
    assert distance(pos, (400, 200)) >= 220


def test_zero_fields_without_any_fields_uses_canvas_center():
    p = Project(id="P", name="P", field_ids=[])
    assert find_position(p, Document()) == (400.0, 400.0)


def test_zero_fields_avoid_each_other():
    doc = _make_single_field_doc()
    for i in range(3):
        p = Project(id=f"o{i}", name=f"O{i}")
        p.move_to(find_position(p, doc))
        doc.add_project(p)
    for p in doc.projects.values():
        assert is_valid_region(p, doc)
        assert is_clear_of_projects(p, doc)


def test_all_dangling_ids_treated_as_zero_fields():
    doc = _make_single_field_doc()
    p = Project(id="P", name="P", field_ids=["ghost"])
    pos = find_position(p, doc)
    assert distance(pos, (400, 200)) >= 220


# --- Determinism ---


def test_placement_is_deterministic():
    doc = _make_two_field_doc()
    doc.add_project(Project(id="a", name="A", field_ids=["F1"], x=-120, y=0))
    p = Project(id="P", name="P", field_ids=["F1"])
    assert find_position(p, doc) == find_position(p, doc)


# --- Nearest valid position ---


def test_nearest_valid_keeps_valid_drop_point():
    doc = _make_single_field_doc()
    p = Project(id="P", name="P", field_ids=["F1"])
    doc.add_project(p)
    assert nearest_valid_position(p, doc, (400, 200)) == (400, 200)


def test_nearest_valid_moves_slightly_off_the_rim():
    doc = Document()
    doc.add_field(Field(id="F", name="F", x=0, y=0, radius=200))
    p = Project(id="P", name="P", field_ids=["F"])
    doc.add_project(p)
    pos = nearest_valid_position(p, doc, (180, 0))
    assert is_valid_region(p, doc, pos)
    assert distance(pos, (180, 0)) < 30


def test_nearest_valid_falls_back_to_full_search():
    doc = Document()
    doc.add_field(Field(id="F", name="F", x=0, y=0, radius=200))
    p = Project(id="P", name="P", field_ids=["F"])
    doc.add_project(p)
    pos = nearest_valid_position(p, doc, (2000, 2000))
    assert is_valid_region(p, doc, pos)


def test_nearest_region_valid_ignores_other_projects():
    doc = _make_single_field_doc()
    doc.add_project(Project(id="a", name="A", field_ids=["F1"], x=400, y=200))
    p = Project(id="P", name="P", field_ids=["F1"], x=400, y=200)
    doc.add_project(p)
    assert nearest_region_valid_position(p, doc) == (400, 200)
