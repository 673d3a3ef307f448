"""Tests for the item editor view-model."""
import pytest

from itinerary_app.models.itinerary import DayPlan, TravelItem, ItemType
from itinerary_app.services.editor import (
    DELETE_PROMPT,
    EditorMode,
    EditorRegistry,
    ItemEditor,
    join_tips,
    split_tips,
)
from itinerary_app.services.links import MapProvider
from itinerary_app.services.store import ItineraryStore


@pytest.fixture
def store():
    return ItineraryStore([
        DayPlan(id="d1", date="12月23日", weekday="周一", items=[
            TravelItem(
                id="x",
                time="Dinner",
                title="兰心餐厅",
                type=ItemType.FOOD,
                address="进贤路130号",
                tips=["只收现金", "", "干烧鲳鱼"],
            ),
            TravelItem(id="y", time="Evening", title="外滩"),
        ]),
        DayPlan(id="empty", date="12月24日", weekday="周二"),
    ])


def editor_for(store, day_id, item_id):
    return ItemEditor(store, day_id, store.find_item(day_id, item_id))


class Prompt:
    """Records confirmation prompts and answers with a fixed value."""

    def __init__(self, answer):
        self.answer = answer
        self.calls = []

    def __call__(self, message):
        self.calls.append(message)
        return self.answer


class TestEditorModes:
    """Test the display/editing/removed state machine."""

    def test_existing_item_starts_in_display(self, store):
        editor = editor_for(store, "d1", "x")
        assert editor.mode == EditorMode.DISPLAY

    def test_new_item_starts_in_editing(self, store):
        item = store.add_item("d1")
        editor = ItemEditor(store, "d1", item)
        assert editor.mode == EditorMode.EDITING

    def test_edit_then_save(self, store):
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()
        editor.set_field("title", "兰心")

        assert store.find_item("d1", "x").title == "兰心餐厅"

        editor.save()

        assert editor.mode == EditorMode.DISPLAY
        assert store.find_item("d1", "x").title == "兰心"
        assert editor.committed.title == "兰心"
        assert editor.draft == editor.committed

    def test_cancel_discards_draft(self, store):
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()
        editor.update_draft(title="changed", cost="¥100")
        version = store.version

        editor.cancel()

        assert editor.mode == EditorMode.DISPLAY
        assert editor.draft.title == "兰心餐厅"
        assert editor.draft.cost is None
        assert store.version == version

    def test_field_edits_ignored_outside_editing(self, store):
        editor = editor_for(store, "d1", "x")
        editor.set_field("title", "changed")
        assert editor.draft.title == "兰心餐厅"

    def test_unknown_field_rejected(self, store):
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()
        with pytest.raises(ValueError):
            editor.set_field("id", "other")

    def test_null_required_field_rejected(self, store):
        """A draft never loses its title or time."""
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()

        with pytest.raises(ValueError):
            editor.set_field("title", None)
        with pytest.raises(ValueError):
            editor.update_draft(cost="¥1", time=None)

        assert editor.draft.title == "兰心餐厅"
        assert editor.draft.cost is None

    def test_type_coerced(self, store):
        editor = editor_for(store, "d1", "y")
        editor.begin_edit()
        editor.set_field("type", "hotel")
        assert editor.draft.type is ItemType.HOTEL

    def test_external_change_resets_draft(self, store):
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()
        editor.set_field("title", "draft title")

        other = editor_for(store, "d1", "x")
        other.begin_edit()
        other.set_field("warning", "周一休息")
        other.save()

        assert editor.committed.warning == "周一休息"
        assert editor.draft.warning == "周一休息"
        assert editor.draft.title == "兰心餐厅"

    def test_external_delete_closes_editor(self, store):
        editor = editor_for(store, "d1", "y")
        store.delete_item("d1", "y")
        assert editor.mode == EditorMode.REMOVED


class TestTips:
    """Test tips editing as a text block."""

    def test_tips_text_joins_lines(self, store):
        editor = editor_for(store, "d1", "x")
        assert editor.tips_text == "只收现金\n\n干烧鲳鱼"

    def test_set_tips_text_keeps_blank_lines(self, store):
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()
        editor.set_tips_text("a\n\n b \n")

        assert editor.draft.tips == ["a", "", " b ", ""]
        assert editor.draft.visible_tips() == ["a", " b "]

    @pytest.mark.parametrize("text", ["one", "a\nb", "\n", "a\n\n\nb\n", " \n x"])
    def test_split_join_round_trip(self, text):
        assert join_tips(split_tips(text)) == text

    def test_missing_tips_is_empty_text(self, store):
        editor = editor_for(store, "d1", "y")
        assert editor.tips_text == ""


class TestDeletion:
    """Test the deletion confirmation policy."""

    def test_placeholder_deleted_without_prompt(self, store):
        item = store.add_item("d1")
        editor = ItemEditor(store, "d1", item)
        prompt = Prompt(False)

        assert editor.delete(prompt) is True
        assert prompt.calls == []
        assert editor.mode == EditorMode.REMOVED
        assert store.find_item("d1", item.id) is None

    def test_declined_prompt_keeps_item(self, store):
        editor = editor_for(store, "d1", "x")
        prompt = Prompt(False)

        assert editor.delete(prompt) is False
        assert prompt.calls == [DELETE_PROMPT]
        assert editor.mode == EditorMode.DISPLAY
        assert store.find_item("d1", "x") is not None

    def test_confirmed_prompt_deletes(self, store):
        editor = editor_for(store, "d1", "x")

        assert editor.delete(Prompt(True)) is True
        assert [i.id for i in store.get_day("d1").items] == ["y"]

    def test_removed_editor_is_inert(self, store):
        editor = editor_for(store, "d1", "y")
        editor.delete(Prompt(True))
        version = store.version

        editor.begin_edit()
        editor.save()
        assert editor.delete(Prompt(True)) is False
        assert editor.mode == EditorMode.REMOVED
        assert store.version == version

    def test_ski_scenario(self, store):
        """Editing away the placeholder title makes deletion ask first."""
        item = store.add_item("empty")
        editor = ItemEditor(store, "empty", item)
        editor.set_field("title", "滑雪")
        editor.save()

        assert store.find_item("empty", item.id).title == "滑雪"

        prompt = Prompt(False)
        assert editor.delete(prompt) is False
        assert prompt.calls == [DELETE_PROMPT]
        assert len(store.get_day("empty").items) == 1

    def test_draft_title_does_not_bypass_prompt(self, store):
        """Only the committed title counts."""
        editor = editor_for(store, "d1", "x")
        editor.begin_edit()
        editor.set_field("title", "新行程")
        prompt = Prompt(False)

        editor.delete(prompt)

        assert prompt.calls == [DELETE_PROMPT]


class TestCopyAndLinks:
    """Test copy acknowledgment and map links."""

    def test_copy_ack_expires(self, store):
        editor = editor_for(store, "d1", "x")

        assert editor.mark_copied(now=100.0) == "进贤路130号"
        assert editor.is_copied(now=101.9)
        assert not editor.is_copied(now=102.0)

    def test_copy_without_address(self, store):
        editor = editor_for(store, "d1", "y")
        assert editor.mark_copied(now=1.0) is None
        assert not editor.is_copied(now=1.0)

    def test_map_url_falls_back_to_title(self, store):
        editor = editor_for(store, "d1", "y")
        assert editor.map_url(MapProvider.AMAP) == "https://uri.amap.com/search?keyword=%E5%A4%96%E6%BB%A9"


class TestEditorRegistry:
    """Test editor lookup."""

    def test_same_editor_returned(self, store):
        registry = EditorRegistry(store)
        assert registry.get("d1", "x") is registry.get("d1", "x")

    def test_unknown_item(self, store):
        registry = EditorRegistry(store)
        assert registry.get("d1", "missing") is None
        assert registry.get("missing", "x") is None

    def test_removed_editor_replaced(self, store):
        registry = EditorRegistry(store)
        editor = registry.get("d1", "y")
        editor.delete(Prompt(True))

        assert registry.get("d1", "y") is None
