"""Tests for AnnotationController operations, history commits and observer events."""

import pytest
from controllers.annotation_controller import AnnotationController
from models.editor_config import EditorConfig
from models.geometry import BOX_PADDING
from tests.conftest import add_text_box, fake_measure


class TestObservers:
    def test_add_and_remove_observer(self, controller):
        events = []

        def observer(event, data):
            events.append(event)

        controller.add_observer(observer)
        controller.add_observer(observer)
        controller.add_box()
        count = len(events)
        assert count > 0
        controller.remove_observer(observer)
        controller.interaction.finish_editing("x")
        assert len(events) == count

    def test_failing_observer_does_not_break_others(self, controller):
        events = []

        def broken(event, data):
            raise RuntimeError("boom")

        controller.add_observer(broken)
        controller.add_observer(lambda e, d: events.append(e))
        controller.add_box()
        assert "box_added" in events


class TestAddBox:
    def test_creates_empty_box_in_edit_mode(self, controller):
        controller.add_box()
        assert len(controller.boxes) == 1
        box = controller.boxes[0]
        assert box.text == ""
        assert (box.x, box.y) == (50.0, 50.0)
        assert (box.width, box.height) == (0.0, 0.0)
        assert controller.editing_id == box.id

    def test_not_committed_until_edit_completes(self, controller):
        controller.add_box()
        assert controller.history_length == 1
        assert not controller.can_undo()

    def test_uses_configured_defaults(self):
        config = EditorConfig(default_position=(10.0, 20.0), default_font_size=18,
                              default_font_family="Georgia")
        ctrl = AnnotationController(fake_measure, config=config)
        box = ctrl.add_box()
        assert (box.x, box.y) == (10.0, 20.0)
        assert box.font_size == 18
        assert box.font_family == "Georgia"

    def test_create_type_blur_scenario(self, controller):
        """Create box, type 'Hello', blur: one box, history length 2."""
        controller.add_box()
        controller.interaction.finish_editing("Hello")
        assert len(controller.boxes) == 1
        assert controller.boxes[0].text == "Hello"
        assert controller.history_length == 2

    def test_abandoned_add_leaves_no_trace(self, controller):
        controller.add_box()
        controller.interaction.finish_editing("")
        assert controller.boxes == []
        assert controller.history_length == 1

    def test_whitespace_edit_removes_box_without_history_entry(self, controller):
        controller.add_box()
        box_id = controller.editing_id
        controller.interaction.finish_editing("   ")
        assert controller.model.get_box(box_id) is None
        for i in range(controller.history_length):
            entry = controller.undo_manager._entries[i]
            assert all(b.id != box_id for b in entry.boxes)

    def test_add_while_editing_closes_previous_session(self, controller):
        controller.add_box()
        first = controller.editing_id
        controller.add_box()
        assert controller.editing_id != first
        assert controller.model.get_box(first) is None

    def test_edit_sets_geometry(self, controller):
        box = add_text_box(controller, "Hello")
        assert box.width == 30 + 2 * BOX_PADDING
        assert box.height == 12 + 2 * BOX_PADDING


class TestDeleteSelected:
    def test_removes_and_commits(self, controller, hello_box):
        before = controller.history_length
        assert controller.delete_selected() is None
        assert controller.boxes == []
        assert controller.selected_id is None
        assert controller.history_length == before + 1

    def test_noop_without_selection(self, controller, hello_box):
        controller.select(None)
        before = controller.history_length
        assert controller.delete_selected() is None
        assert len(controller.boxes) == 1
        assert controller.history_length == before

    def test_delete_while_editing_closes_editor(self, controller, hello_box):
        events = []
        controller.add_observer(lambda e, d: events.append(e))
        controller.interaction.begin_editing(hello_box.id)
        controller.delete_selected()
        assert controller.editing_id is None
        assert "edit_finished" in events


class TestStyleOperations:
    @pytest.mark.parametrize("operation", [
        lambda c: c.set_font_family("Arial"),
        lambda c: c.adjust_font_size(1),
        lambda c: c.adjust_font_size(-1),
        lambda c: c.toggle_bold(),
        lambda c: c.toggle_italic(),
        lambda c: c.cycle_alignment(),
        lambda c: c.toggle_underline(),
    ])
    def test_noop_without_selection(self, controller, hello_box, operation):
        controller.select(None)
        before = controller.history_length
        snapshot = controller.model.snapshot()
        assert operation(controller) is None
        assert controller.history_length == before
        assert controller.model.snapshot() == snapshot

    @pytest.mark.parametrize("operation", [
        lambda c: c.set_font_family("Arial"),
        lambda c: c.adjust_font_size(1),
        lambda c: c.toggle_bold(),
        lambda c: c.toggle_italic(),
        lambda c: c.cycle_alignment(),
        lambda c: c.toggle_underline(),
    ])
    def test_each_commits_one_entry(self, controller, hello_box, operation):
        before = controller.history_length
        operation(controller)
        assert controller.history_length == before + 1

    def test_font_family_applied_verbatim(self, controller, hello_box):
        box = controller.set_font_family("Not A Real Font")
        assert box.font_family == "Not A Real Font"

    def test_font_size_step_recomputes_geometry(self, controller, hello_box):
        box = controller.adjust_font_size(1)
        assert box.font_size == 13
        assert box.height == 13 + 2 * BOX_PADDING
        assert box.width == 5 * 6.5 + 2 * BOX_PADDING
        assert hello_box.width == box.width

    def test_font_size_floor(self, controller, hello_box):
        for _ in range(20):
            controller.adjust_font_size(-1)
        assert hello_box.font_size == 1

    def test_font_size_at_floor_does_not_commit(self, controller, hello_box):
        hello_box.font_size = 1
        before = controller.history_length
        controller.adjust_font_size(-1)
        assert controller.history_length == before

    def test_bold_toggle_twice(self, controller, hello_box):
        """Toggling twice restores the state but pushes two entries."""
        before = controller.history_length
        initial = hello_box.font_bold
        assert controller.toggle_bold().font_bold == "bold"
        assert controller.toggle_bold().font_bold == initial
        assert controller.history_length == before + 2

        controller.undo()
        assert controller.selected_box().font_bold == "bold"
        controller.undo()
        assert controller.selected_box().font_bold == initial

    def test_bold_changes_width(self, controller, hello_box):
        plain_width = hello_box.width
        controller.toggle_bold()
        assert hello_box.width > plain_width

    def test_italic_presence(self, controller, hello_box):
        assert controller.toggle_italic().font_italic == "italic"
        assert controller.toggle_italic().font_italic is None

    def test_alignment_cycle(self, controller, hello_box):
        seen = [controller.cycle_alignment().text_alignment for _ in range(4)]
        assert seen == ["left", "center", "right", None]

    def test_underline_toggle(self, controller, hello_box):
        assert controller.toggle_underline().text_underline is True
        assert controller.toggle_underline().text_underline is False

    def test_returns_snapshot_copy(self, controller, hello_box):
        snapshot = controller.toggle_bold()
        snapshot.font_bold = None
        assert hello_box.font_bold == "bold"

    def test_growth_keeps_box_on_surface(self, controller):
        box = add_text_box(controller, "Wide", position=(280, 450))
        controller.select(box.id)
        for _ in range(10):
            controller.adjust_font_size(1)
        assert box.x + box.width <= 300
        assert box.y + box.height <= 480


class TestUndoRedo:
    def test_undo_restores_previous_collection(self, controller, hello_box):
        controller.undo()
        assert controller.boxes == []

    def test_undo_clears_missing_selection(self, controller, hello_box):
        controller.undo()
        assert controller.selected_id is None

    def test_undo_keeps_existing_selection(self, controller, hello_box):
        controller.toggle_bold()
        controller.undo()
        assert controller.selected_id == hello_box.id

    def test_undo_redo_inverse(self, controller, hello_box):
        """undo(); redo() restores the exact pre-undo collection by value."""
        controller.toggle_underline()
        controller.adjust_font_size(3)
        before = controller.model.snapshot()
        controller.undo()
        controller.redo()
        assert controller.model.snapshot() == before

    def test_undo_at_start_is_noop(self, controller):
        assert controller.undo() is None
        assert controller.history_index == 0

    def test_redo_at_tail_is_noop(self, controller, hello_box):
        before = controller.model.snapshot()
        controller.redo()
        assert controller.model.snapshot() == before

    def test_commit_after_undo_drops_redo_branch(self, controller, hello_box):
        controller.toggle_bold()
        controller.undo()
        controller.toggle_italic()
        assert not controller.can_redo()
        assert controller.history_index == controller.history_length - 1
        assert controller.model.snapshot() == controller.undo_manager.current().boxes

    def test_live_edits_do_not_alter_history(self, controller, hello_box):
        hello_box.text = "tampered"
        assert controller.undo_manager.current().boxes[0].text == "Hello"

    def test_undo_while_editing_new_box(self, controller, hello_box):
        controller.add_box()
        controller.undo()
        assert controller.editing_id is None
        assert controller.boxes == []

    def test_descriptions(self, controller, hello_box):
        controller.toggle_bold()
        assert controller.get_undo_description() == "Toggle bold"
        controller.undo()
        assert controller.get_redo_description() == "Toggle bold"

    def test_restore_fires_events(self, controller, hello_box):
        events = []
        controller.add_observer(lambda e, d: events.append(e))
        controller.undo()
        assert "boxes_restored" in events
        assert "history_changed" in events


class TestReadOnlyState:
    def test_selected_box_is_copy(self, controller, hello_box):
        copy = controller.selected_box()
        assert copy == hello_box
        assert copy is not hello_box

    def test_selected_box_none(self, controller):
        assert controller.selected_box() is None

    def test_surface_size(self, controller):
        assert controller.surface_size == (300, 480)

    def test_select_unknown_id_clears(self, controller, hello_box):
        controller.select("nope")
        assert controller.selected_id is None

    def test_selection_event_only_on_change(self, controller, hello_box):
        events = []
        controller.add_observer(lambda e, d: events.append(e))
        controller.select(hello_box.id)
        assert "selection_changed" not in events


SELECTION_OPERATIONS = [
    pytest.param(lambda c: c.set_font_family("Arial"), id="font_family"),
    pytest.param(lambda c: c.adjust_font_size(1), id="font_bigger"),
    pytest.param(lambda c: c.adjust_font_size(-1), id="font_smaller"),
    pytest.param(lambda c: c.toggle_bold(), id="bold"),
    pytest.param(lambda c: c.toggle_italic(), id="italic"),
    pytest.param(lambda c: c.cycle_alignment(), id="alignment"),
    pytest.param(lambda c: c.toggle_underline(), id="underline"),
    pytest.param(lambda c: c.delete_selected(), id="delete"),
]


def _history_boxes(controller):
    for entry in controller.undo_manager._entries:
        yield from entry.boxes


class TestOperationsWhileAddingBox:
    """Selection operations issued before a new box has any text."""

    @pytest.mark.parametrize("operation", SELECTION_OPERATIONS)
    def test_abandoned_add_leaves_no_history(self, controller, operation):
        controller.add_box()
        assert operation(controller) is None
        assert controller.boxes == []
        assert controller.editing_id is None
        assert controller.history_length == 1
        assert not controller.can_undo()

    @pytest.mark.parametrize("operation", SELECTION_OPERATIONS)
    def test_history_never_holds_blank_box(self, controller, hello_box, operation):
        controller.add_box()
        operation(controller)
        assert all(b.text.strip() for b in _history_boxes(controller))

    @pytest.mark.parametrize("operation", SELECTION_OPERATIONS)
    def test_undo_never_restores_blank_box(self, controller, hello_box, operation):
        controller.add_box()
        operation(controller)
        controller.add_box()
        controller.interaction.finish_editing("World")
        while controller.can_undo():
            controller.undo()
            assert all(b.text.strip() for b in controller.boxes)

    def test_style_change_closes_edit_of_committed_box(self, controller, hello_box):
        controller.interaction.begin_editing(hello_box.id)
        box = controller.toggle_bold()
        assert controller.editing_id is None
        assert box.text == "Hello"
        assert box.font_bold == "bold"
        assert controller.get_undo_description() == "Toggle bold"

    def test_delete_while_editing_committed_box_is_undoable(self, controller, hello_box):
        controller.interaction.begin_editing(hello_box.id)
        controller.delete_selected()
        assert controller.get_undo_description() == "Delete box"
        controller.undo()
        assert [b.text for b in controller.boxes] == ["Hello"]
