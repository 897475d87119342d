from vox_editor.history import Diff, DiffKind, History, HistoryView, describe
from vox_editor.project import Document, Line, ParameterBundle


def make_history() -> tuple[History, Document]:
    document = Document()
    document.add_line(Line(text="a", parameters=ParameterBundle()), line_id="L1")
    history = History()
    history.apply(DiffKind.TEXT, "L1", "b", document)
    history.commit()
    history.apply(DiffKind.PITCH, "L1", 0.1, document)
    history.commit()
    history.apply(DiffKind.SPEED, "L1", 1.5, document)
    history.commit()
    return history, document


def test_view_with_nothing_undone_marks_latest() -> None:
    history, _ = make_history()

    view = history.view()

    assert view.current_marker_position == 0
    assert view.redo_entries == ()
    assert [d.kind for d in view.undo_entries] == [
        DiffKind.SPEED,
        DiffKind.PITCH,
        DiffKind.TEXT,
    ]
    rows = view.rows()
    assert rows[0].label == "Latest"
    assert rows[0].current
    assert [row.current for row in rows[1:]] == [False, False, False]


def test_view_places_redo_entries_above_undo_entries() -> None:
    history, document = make_history()
    history.undo(document)
    history.undo(document)

    view = history.view()

    assert view.current_marker_position == 2
    assert [d.kind for d in view.redo_entries] == [DiffKind.SPEED, DiffKind.PITCH]
    assert [d.kind for d in view.undo_entries] == [DiffKind.TEXT]
    rows = view.rows()
    assert [row.applied for row in rows[1:]] == [False, False, True]
    assert [row.index for row in rows if row.current] == [2]
    assert rows[2].diff is not None and rows[2].diff.kind is DiffKind.PITCH


def test_view_lines_render_star_on_current_row() -> None:
    history, document = make_history()
    history.undo(document)

    lines = history.view().lines()

    assert lines[0] == "  Latest"
    assert lines[1] == "* Speed change 1.00 -> 1.50"
    assert lines[3] == "  Text edit a -> b"


def test_view_is_a_pure_projection() -> None:
    history, _ = make_history()
    before = (history.undo_stack, history.redo_stack)

    history.view().rows()

    assert (history.undo_stack, history.redo_stack) == before


def test_describe_formats_each_kind() -> None:
    assert describe(Diff(DiffKind.PITCH, "x", 0.0, 0.1)) == "Pitch change 0.00 -> 0.10"
    assert describe(Diff(DiffKind.VOICE_STYLE, "x", 1, 3)) == "Voice change 1 -> 3"
    assert (
        describe(Diff(DiffKind.PRE_SILENCE, "x", None, 0.25))
        == "Leading silence change ? -> 0.25"
    )


def test_empty_view() -> None:
    view = HistoryView.from_stacks([], [])

    assert len(view.rows()) == 1
    assert view.rows()[0].current
