"""
Offscreen checks for the Qt render surface and the control bar.
"""
from PySide6.QtCore import QAbstractAnimation

from playback.controller import ControlState
from playback.diff import TAG_CHANGED, TAG_GRAYED
from ui.control_bar import ControlBar
from ui.track_grid import EmptyTrackBlock, TrackBlock, TrackGridView, cell_style, fade_duration_ms


def test_track_block_cells_and_rows():
    block = TrackBlock("run", columns=4, total_rows=3)
    assert len(block.cells) == 12

    block.set_cell(5, "cat", frozenset({TAG_CHANGED}))
    assert block.cells[5].text() == "cat"
    assert block.cells[5].tags == frozenset({TAG_CHANGED})

    block.set_cell(5, "", frozenset())
    assert block.cells[5].text() == " "

    block.set_cell(99, "ignored", frozenset())

    block.set_visible_rows(2)
    assert [row.isHidden() for row in block.rows] == [False, False, True]


def test_badge_visibility():
    block = TrackBlock("run", columns=2, total_rows=1)
    block.set_badge("Done at step 3")
    assert not block.header.badge.isHidden()
    assert block.header.badge.text() == "Done at step 3"
    block.set_badge(None)
    assert block.header.badge.isHidden()


def test_empty_block_never_shows_badge():
    block = EmptyTrackBlock("empty", "No data in this CSV.")
    block.set_badge("Done at step 0")
    assert block.header.badge.isHidden()
    assert block.message.text() == "No data in this CSV."


def test_grid_view_blocks_and_message():
    view = TrackGridView()
    a = view.create_block("a", 2, 1)
    b = view.create_empty_block("b", "none")
    view.set_blocks([a, b])
    assert view.blocks == [a, b]
    assert view.message_label is None

    view.show_message("Loading tracks…")
    assert view.blocks == []
    assert view.message_label.text() == "Loading tracks…"

    view.clear()
    assert view.message_label is None


def test_cell_style_varies_by_tag():
    plain = cell_style(frozenset())
    assert cell_style(frozenset()) is plain
    assert "#38bdf8" in cell_style(frozenset({TAG_CHANGED}))
    assert "#4b5563" in cell_style(frozenset({TAG_GRAYED}))


def test_control_bar_reflects_state_and_emits_speed():
    bar = ControlBar(speed_ms=500)
    assert not bar.btn_play.isEnabled()

    bar.set_controls(ControlState(step=2, last_index=5, can_prev=True, can_next=True,
                                  can_play=False, can_pause=True))
    assert bar.lbl_step.text() == "Step 2 / 5"
    assert bar.btn_pause.isEnabled()
    assert not bar.btn_play.isEnabled()

    speeds = []
    bar.speedChanged.connect(speeds.append)
    bar.spin_speed.setValue(250)
    assert speeds == [250]
    assert bar.lbl_speed.text() == "250ms"


def test_control_bar_buttons_emit_requests():
    bar = ControlBar()
    seen = []
    bar.nextRequested.connect(lambda: seen.append("next"))
    bar.prevRequested.connect(lambda: seen.append("prev"))
    bar.set_controls(ControlState(step=1, last_index=3, can_prev=True, can_next=True,
                                  can_play=True, can_pause=False))
    bar.btn_next.click()
    bar.btn_prev.click()
    assert seen == ["next", "prev"]


def test_fade_duration_has_a_floor():
    assert fade_duration_ms(500) == 500
    assert fade_duration_ms(10) == 50


def test_changed_cell_fades_in_for_the_current_speed():
    view = TrackGridView()
    view.set_fade_duration(800)
    block = view.create_block("a", 2, 1)
    view.set_blocks([block])

    block.set_cell(0, "cat", frozenset())
    assert block.cells[0].fade_animation() is None

    block.set_cell(1, "sat", frozenset({TAG_CHANGED}))
    anim = block.cells[1].fade_animation()
    assert anim.duration() == 800
    assert anim.state() == QAbstractAnimation.State.Running


def test_fade_follows_speed_changes_from_the_control_bar():
    view = TrackGridView()
    block = view.create_block("a", 2, 1)
    view.set_blocks([block])
    bar = ControlBar(speed_ms=500)
    bar.speedChanged.connect(view.set_fade_duration)

    bar.spin_speed.setValue(250)
    block.set_cell(0, "x", frozenset({TAG_CHANGED}))
    assert block.cells[0].fade_animation().duration() == 250

    bar.spin_speed.setValue(20)
    block.set_cell(0, "y", frozenset({TAG_CHANGED}))
    assert block.cells[0].fade_animation().duration() == 50
