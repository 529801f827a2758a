import copy

import pytest

from layout_state import Store, EditorState, AddBlock, UpdateBlock, Block


def test_store_apply_undo_redo(store):
    bid = store.add_block("header", "logo")
    store.set_block_width(bid, 40)
    store.update_global_styles(primary_color="#111111")

    assert store.layout.find_block(bid)[1].position.width == 40

    store.undo()
    assert store.layout.global_styles["primary_color"] == "#3b82f6"

    store.undo()
    assert store.layout.find_block(bid)[1].position.width == 25

    store.redo()
    store.redo()
    assert store.layout.find_block(bid)[1].position.width == 40
    assert store.layout.global_styles["primary_color"] == "#111111"
    assert store.can_redo is False


def test_undo_redo_round_trip_restores_layouts(store):
    initial = copy.deepcopy(store.layout)
    a = store.add_block("header", "company-info")
    b = store.add_block("body", "line-items-table")
    store.update_config(b, "zebra_rows", "no")
    store.move_block_over(a, a)  # same slot: nothing to do
    store.remove_block(a)
    final = copy.deepcopy(store.layout)
    steps = store.state.history_index

    for _ in range(steps):
        store.undo()
    assert store.layout == initial
    assert store.can_undo is False

    for _ in range(steps):
        store.redo()
    assert store.layout == final


def test_history_entry_is_current_layout(store):
    bid = store.add_block("body", "free-text")
    store.update_style(bid, "font_size", 12)
    s = store.state
    assert s.history[s.history_index] is s.layout
    store.undo()
    s = store.state
    assert s.history[s.history_index] is s.layout
    assert s.is_dirty is True


def test_new_edit_after_undo_truncates_redo_tail(store):
    bid = store.add_block("body", "spacer")
    store.set_block_width(bid, 50)
    store.undo()
    assert store.can_redo is True

    store.toggle_visible(bid)
    assert store.can_redo is False
    store.redo()  # nothing to redo
    _, blk = store.layout.find_block(bid)
    assert blk.position.width == 100 and blk.visible is False


def test_undo_redo_at_ends_are_noops(store):
    before = store.state
    assert store.undo() is before
    assert store.redo() is before


def test_undo_clears_selection_of_vanished_block(store):
    bid = store.add_block("footer", "signature")
    assert store.state.selected_block_id == bid
    store.undo()
    assert store.state.selected_block_id is None


def test_drag_commits_as_single_undo_step(store):
    store.toggle_snap(False)
    bid = store.add_block("body", "image")
    index = store.state.history_index
    for x in (3, 7, 12):
        store.move_block(bid, x=x)
    assert store.state.history_index == index

    store.end_drag()
    assert store.state.history_index == index + 1
    assert store.layout.find_block(bid)[1].position.x == 12

    store.undo()
    assert store.layout.find_block(bid)[1].position.x == 0

    # nothing pending: a second end_drag adds no entry
    store.redo()
    store.end_drag()
    assert store.state.history_index == index + 1


def test_move_snaps_only_y_to_grid(store):
    bid = store.add_block("body", "image")
    store.set_grid_size(10)
    store.move_block(bid, x=14, y=26)
    pos = store.layout.find_block(bid)[1].position
    # x is a percentage of the section width, the grid is in mm
    assert (pos.x, pos.y) == (14, 30)


def test_end_drag_after_click_adds_no_undo_step(store):
    store.toggle_snap(False)
    bid = store.add_block("body", "image")
    index, length = store.state.history_index, len(store.state.history)

    before = store.state
    assert store.move_block(bid, x=0) is before  # already there
    store.move_block(bid, x=20)
    store.move_block(bid, x=0)                   # dragged back
    store.end_drag()

    assert (store.state.history_index, len(store.state.history)) == (index, length)
    assert store.can_redo is False


def test_width_and_x_use_slider_bounds(store):
    bid = store.add_block("body", "free-text")
    store.set_block_width(bid, 12)
    assert store.layout.find_block(bid)[1].position.width == 25
    store.set_block_width(bid, 63)
    assert store.layout.find_block(bid)[1].position.width == 65
    store.set_block_width(bid, 180)
    assert store.layout.find_block(bid)[1].position.width == 100
    store.set_block_x(bid, 90)
    assert store.layout.find_block(bid)[1].position.x == 75


def test_block_ids_stay_unique(store):
    ids = [store.add_block(sec, "free-text") for sec in ("header", "body", "footer")]
    ids.append(store.duplicate_block(ids[0]))
    ids.append(store.duplicate_block(ids[-1]))
    all_ids = store.layout.block_ids()
    assert len(all_ids) == len(set(all_ids)) == 5
    assert set(ids) == set(all_ids)


def test_duplicate_copies_unlocked_into_same_section(store):
    bid = store.add_block("header", "logo")
    store.toggle_locked(bid)
    store.update_config(bid, "max_width", "200")
    copy_id = store.duplicate_block(bid)
    header = store.layout.find_section("header").blocks
    assert [b.id for b in header] == [bid, copy_id]
    assert header[1].locked is False
    assert header[1].config == header[0].config == {"show_logo": True, "max_width": 200}
    assert store.state.selected_block_id == copy_id


def test_move_block_over_reorders_within_section(store):
    a = store.add_block("body", "line-items-table")
    b = store.add_block("body", "totals")
    c = store.add_block("body", "free-text")
    store.move_block_over(c, a)
    assert store.layout.find_section("body").blocks[0].id == c
    assert [blk.id for blk in store.layout.find_section("body").blocks] == [c, a, b]


def test_update_config_rejects_invalid_values(store):
    bid = store.add_block("footer", "qr-code")
    with pytest.raises(ValueError):
        store.update_config(bid, "size", 500)
    with pytest.raises(ValueError):
        store.update_config(bid, "color", "red")
    store.update_config(bid, "content", "PAYMENT")
    assert store.layout.find_block(bid)[1].config["content"] == "payment"


def test_listeners_see_changes_but_not_noops(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.add_block("body", "separator")
    store.apply(UpdateBlock("ghost", {"locked": True}))
    assert len(seen) == 1 and seen[0] is store.state
    unsubscribe()
    store.add_block("body", "separator")
    assert len(seen) == 1


def test_add_block_unknown_section_returns_none(store):
    assert store.add_block("sidebar", "logo") is None
    assert store.layout.block_ids() == []


def test_store_accepts_explicit_blocks(registry):
    store = Store(state=EditorState.fresh(), registry=registry)
    store.apply(AddBlock("body", Block(id="x", type="spacer")))
    assert store.try_apply(AddBlock("body", Block(id="x", type="spacer"))).applied is False
