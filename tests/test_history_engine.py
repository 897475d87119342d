from __future__ import annotations

import pytest

from vox_editor.history import Diff, DiffKind, History
from vox_editor.project import Document, Line, ParameterBundle
from vox_editor.runtime import telemetry


def make_document(*, with_parameters: bool = True) -> Document:
    document = Document()
    document.add_line(
        Line(
            text="hello",
            voice_style_id=3,
            parameters=ParameterBundle() if with_parameters else None,
        ),
        line_id="L1",
    )
    document.add_line(
        Line(text="world", voice_style_id=3, parameters=ParameterBundle()),
        line_id="L2",
    )
    return document


def drag(
    history: History, document: Document, kind: DiffKind, values: list[float]
) -> None:
    for value in values:
        history.apply(kind, "L1", value, document)


def test_apply_fills_before_and_mutates_document() -> None:
    document = make_document()
    history = History()

    diff = history.apply(DiffKind.TEXT, "L1", "hi", document)

    assert diff == Diff(DiffKind.TEXT, "L1", before="hello", after="hi")
    assert document.lines["L1"].text == "hi"
    assert history.pending == (diff,)
    assert history.undo_stack == ()


def test_pitch_drag_squashes_into_one_entry() -> None:
    document = make_document()
    history = History()

    drag(history, document, DiffKind.PITCH, [0.01, 0.05, 0.10])
    pushed = history.commit()

    expected = Diff(DiffKind.PITCH, "L1", before=0.0, after=0.10)
    assert pushed == (expected,)
    assert history.undo_stack == (expected,)
    assert history.pending == ()

    history.undo(document)
    assert document.lines["L1"].parameters.pitch == 0.0
    assert history.redo_stack == (expected,)
    assert history.undo_stack == ()

    history.redo(document)
    assert document.lines["L1"].parameters.pitch == 0.10
    assert history.undo_stack == (expected,)


def test_undo_restores_start_value_not_intermediate() -> None:
    document = make_document()
    history = History()

    drag(history, document, DiffKind.SPEED, [1.1, 1.2, 1.3, 1.4])
    history.commit()
    history.undo(document)

    assert document.lines["L1"].parameters.speed == 1.0


def test_single_diff_commit_keeps_its_own_before() -> None:
    document = make_document()
    history = History()

    history.apply(DiffKind.VOLUME, "L1", 1.5, document)
    pushed = history.commit()

    assert pushed == (Diff(DiffKind.VOLUME, "L1", before=1.0, after=1.5),)


def test_noop_edit_is_still_committed() -> None:
    document = make_document()
    history = History()

    history.apply(DiffKind.TEXT, "L1", "hello", document)
    history.commit()

    assert history.undo_stack == (Diff(DiffKind.TEXT, "L1", "hello", "hello"),)


def test_heterogeneous_commit_flushes_entries_in_order() -> None:
    document = make_document()
    history = History()

    text = history.apply(DiffKind.TEXT, "L1", "hey", document)
    pitch = history.apply(DiffKind.PITCH, "L1", 0.05, document)
    pushed = history.commit()

    assert pushed == (text, pitch)
    assert history.undo_stack == (text, pitch)
    assert history.pending == ()


def test_same_kind_different_target_is_not_squashed() -> None:
    document = make_document()
    history = History()

    first = history.apply(DiffKind.PITCH, "L1", 0.05, document)
    second = history.apply(DiffKind.PITCH, "L2", 0.07, document)
    history.commit()

    assert history.undo_stack == (first, second)


def test_commit_with_empty_buffer_is_noop() -> None:
    history = History()

    assert history.commit() == ()
    assert history.undo_stack == ()


def test_apply_clears_redo_stack() -> None:
    document = make_document()
    history = History()
    history.apply(DiffKind.TEXT, "L1", "one", document)
    history.commit()
    history.apply(DiffKind.TEXT, "L1", "two", document)
    history.commit()
    history.undo(document)
    history.undo(document)
    assert len(history.redo_stack) == 2

    history.apply(DiffKind.INTONATION, "L2", 1.5, document)

    assert history.redo_stack == ()
    assert not history.can_redo()


def test_pending_edits_are_not_undoable_before_commit() -> None:
    document = make_document()
    history = History()

    history.apply(DiffKind.TEXT, "L1", "draft", document)

    assert history.undo(document) is None
    assert document.lines["L1"].text == "draft"


def test_round_trip_for_every_kind() -> None:
    values = {
        DiffKind.TEXT: "changed",
        DiffKind.VOICE_STYLE: 8,
        DiffKind.PITCH: 0.12,
        DiffKind.SPEED: 1.7,
        DiffKind.INTONATION: 0.3,
        DiffKind.VOLUME: 1.9,
        DiffKind.PRE_SILENCE: 0.5,
        DiffKind.POST_SILENCE: 1.2,
    }
    for kind, value in values.items():
        document = make_document()
        history = History()
        before = document.snapshot()

        history.apply(kind, "L1", value, document)
        history.commit()
        after = document.snapshot()

        history.undo(document)
        assert document == before, kind
        history.redo(document)
        assert document == after, kind


def test_empty_undo_and_redo_change_nothing() -> None:
    document = make_document()
    history = History()
    before = document.snapshot()

    assert history.undo(document) is None
    assert history.redo(document) is None
    assert document == before
    assert history.undo_stack == ()
    assert history.redo_stack == ()


def test_undo_redo_conserve_entry_count() -> None:
    document = make_document()
    history = History()
    for text in ("a", "b", "c"):
        history.apply(DiffKind.TEXT, "L1", text, document)
        history.commit()

    steps = (history.undo, history.undo, history.redo, history.undo, history.undo)
    for step in steps:
        step(document)
        assert len(history.undo_stack) + len(history.redo_stack) == 3

    assert document.lines["L1"].text == "hello"
    assert history.depth == 3


def test_missing_target_is_absorbed_and_still_buffered() -> None:
    document = make_document()
    history = History()
    before = document.snapshot()

    diff = history.apply(DiffKind.TEXT, "ghost", "boo", document)

    assert diff.before is None
    assert document == before
    assert history.pending == (diff,)

    history.commit()
    history.undo(document)
    history.redo(document)
    assert document == before


def test_line_without_parameters_absorbs_parameter_edits() -> None:
    document = make_document(with_parameters=False)
    history = History()

    diff = history.apply(DiffKind.PITCH, "L1", 0.1, document)

    assert diff.before is None
    assert document.lines["L1"].parameters is None


def test_stale_reference_after_line_removal_does_not_raise() -> None:
    document = make_document()
    history = History()
    history.apply(DiffKind.TEXT, "L2", "gone soon", document)
    history.commit()

    document.remove_line("L2")

    assert history.undo(document) is not None
    assert history.redo(document) is not None
    assert "L2" not in document


def test_dirty_tracking_follows_saved_position() -> None:
    document = make_document()
    history = History()
    assert not history.is_dirty

    history.apply(DiffKind.TEXT, "L1", "x", document)
    assert history.is_dirty
    history.commit()
    history.mark_saved()
    assert not history.is_dirty

    history.undo(document)
    assert history.is_dirty
    history.redo(document)
    assert not history.is_dirty


def test_clear_drops_everything() -> None:
    document = make_document()
    history = History()
    history.apply(DiffKind.TEXT, "L1", "x", document)
    history.commit()
    history.undo(document)
    history.apply(DiffKind.TEXT, "L1", "y", document)

    history.clear()

    assert history.undo_stack == history.redo_stack == history.pending == ()


def test_diff_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        Diff.template("loudness", "L1", 1.0)


def test_squash_of_mismatched_diffs_raises() -> None:
    first = Diff(DiffKind.PITCH, "L1", 0.0, 0.1)
    last = Diff(DiffKind.SPEED, "L1", 1.0, 1.1)

    with pytest.raises(ValueError):
        first.squash(last)


def capture_events(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str]]:
    events: list[tuple[str, str]] = []

    def fake_record_event(name: str, *, level: str = "info", **_kwargs) -> None:
        events.append((name, level))

    monkeypatch.setattr(telemetry, "record_event", fake_record_event)
    return events


def test_heterogeneous_commit_reports_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    events = capture_events(monkeypatch)
    document = make_document()
    history = History()

    history.apply(DiffKind.TEXT, "L1", "hey", document)
    history.apply(DiffKind.PITCH, "L1", 0.05, document)
    history.commit()

    assert ("history.squash_rejected", "warning") in events


def test_squashed_commit_reports_no_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    events = capture_events(monkeypatch)
    document = make_document()
    history = History()

    drag(history, document, DiffKind.PITCH, [0.01, 0.02])
    history.commit()

    assert all(name != "history.squash_rejected" for name, _ in events)


def test_missing_target_reports_debug_event(monkeypatch: pytest.MonkeyPatch) -> None:
    events = capture_events(monkeypatch)
    history = History()

    history.apply(DiffKind.TEXT, "ghost", "boo", make_document())

    assert ("history.missing_target", "debug") in events


def test_empty_target_id_is_absorbed_like_any_missing_line() -> None:
    document = make_document()
    history = History()
    before = document.snapshot()

    diff = history.apply(DiffKind.TEXT, "", "x", Document())
    history.apply(DiffKind.PITCH, "", 0.1, document)

    assert diff.before is None
    assert document == before
    assert len(history.pending) == 2


def test_voice_style_value_is_stored_as_recorded() -> None:
    document = make_document()
    history = History()

    diff = history.apply(DiffKind.VOICE_STYLE, "L1", 1.7, document)

    assert diff.after == 1
    assert document.lines["L1"].voice_style_id == diff.after
