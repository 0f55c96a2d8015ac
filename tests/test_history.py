"""Tests for the undo/redo snapshot buffer."""

from venncv.history import History
from venncv.layout import new_project, relax_and_validate
from venncv.parser.model import Document, Field


def _make_doc():
    doc = Document()
    doc.add_field(Field(id="F", name="F", x=0, y=0))
    return doc


def test_undo_and_redo():
    doc = _make_doc()
    history = History(doc)
    assert not history.can_undo()

    doc.fields["F"].x = 50
    history.record(doc)
    assert history.can_undo()

    previous = history.undo()
    assert previous.fields["F"].x == 0
    assert history.can_redo()
    assert history.redo().fields["F"].x == 50
    assert not history.can_redo()


def test_snapshots_are_independent_copies():
    doc = _make_doc()
    history = History(doc)
    doc.fields["F"].x = 99
    assert history.undo() is None
    history.record(doc)
    doc.fields["F"].x = -1
    assert history.undo().fields["F"].x == 0
    assert history.redo().fields["F"].x == 99


def test_record_discards_redo_states():
    doc = _make_doc()
    history = History(doc)
    history.record(doc)
    history.record(doc)
    history.undo()
    history.record(doc)
    assert not history.can_redo()
    assert len(history) == 3


def test_size_is_bounded():
    doc = _make_doc()
    history = History(doc, max_size=5)
    for x in range(10):
        doc.fields["F"].x = x
        history.record(doc)
    assert len(history) == 5
    undone = 0
    while history.can_undo():
        history.undo()
        undone += 1
    assert undone == 4


def test_undo_a_placed_project():
    doc = _make_doc()
    history = History(doc)
    project = new_project(doc, "Survey", ["F"])
    relax_and_validate(doc)
    history.record(doc)

    before = history.undo()
    assert list(before.projects) == []
    after = history.redo()
    assert after.projects[project.id].center == project.center
