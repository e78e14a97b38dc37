import pytest

from msgbox_kit.color import Color
from msgbox_kit.tab_bar import (
    Reordered,
    Selected,
    TabBar,
    TabBarConfig,
    TabClicked,
    TabMoved,
)


def test_default_config():
    config = TabBarConfig()
    assert config.drag_threshold == 6.0
    assert config.ghost_opacity == 0.8
    assert config.rounding == 6.0
    assert config.spacing == 4.0


def test_builder_pattern():
    bar = (
        TabBar()
        .with_drag_threshold(10.0)
        .with_ghost_opacity(0.5)
        .with_active_bg(Color.from_rgb8(0xFF, 0x00, 0x00))
    )
    assert bar.config.drag_threshold == 10.0
    assert bar.config.ghost_opacity == 0.5
    assert bar.config.active_bg == Color(1.0, 0.0, 0.0, 1.0)


def test_builder_does_not_mutate_original():
    bar = TabBar()
    bar.with_drag_threshold(20.0)
    assert bar.config.drag_threshold == 6.0


def test_other_colour_builders():
    red = Color.from_rgb(1.0, 0.0, 0.0)
    blue = Color.from_rgb(0.0, 0.0, 1.0)
    bar = TabBar().with_inactive_bg(red).with_ghost_bg(blue)
    assert bar.config.inactive_bg == red
    assert bar.config.ghost_bg == blue


@pytest.mark.parametrize("alpha, expected", [(1.5, 1.0), (-0.5, 0.0), (0.3, 0.3)])
def test_ghost_opacity_clamped(alpha, expected):
    assert TabBar().with_ghost_opacity(alpha).config.ghost_opacity == expected


def test_update_tab_clicked():
    labels = ["A", "B", "C"]
    action = TabBar().update(TabClicked(2), labels, 0)
    assert action == Selected(2)
    assert labels == ["A", "B", "C"]


def test_update_tab_clicked_out_of_range():
    assert TabBar().update(TabClicked(3), ["A", "B", "C"], 0) is None
    assert TabBar().update(TabClicked(-1), ["A", "B", "C"], 0) is None


def test_update_tab_moved():
    labels = ["A", "B", "C"]
    action = TabBar().update(TabMoved(0, 2), labels, 0)
    assert action == Reordered(2)
    assert labels == ["B", "C", "A"]


def test_update_tab_moved_invalid():
    labels = ["A", "B"]
    assert TabBar().update(TabMoved(0, 5), labels, 0) is None
    assert labels == ["A", "B"]


def test_update_same_index_noop():
    labels = ["A", "B"]
    assert TabBar().update(TabMoved(1, 1), labels, 0) is None
    assert labels == ["A", "B"]


def test_selection_shifts_left_when_earlier_tab_moves_past_it():
    labels = ["A", "B", "C", "D"]
    action = TabBar().update(TabMoved(0, 3), labels, 2)
    assert labels == ["B", "C", "D", "A"]
    assert action == Reordered(1)
    assert labels[action.selected] == "C"


def test_selection_shifts_right_when_later_tab_moves_before_it():
    labels = ["A", "B", "C", "D"]
    action = TabBar().update(TabMoved(3, 0), labels, 1)
    assert labels == ["D", "A", "B", "C"]
    assert action == Reordered(2)
    assert labels[action.selected] == "B"


def test_selection_unchanged_when_move_is_elsewhere():
    labels = ["A", "B", "C", "D"]
    action = TabBar().update(TabMoved(2, 3), labels, 0)
    assert labels == ["A", "B", "D", "C"]
    assert action == Reordered(0)


def test_view_describes_tabs():
    bar = TabBar()
    specs = bar.view(["Home", "Settings"], 1)
    assert [s.label for s in specs] == ["Home", "Settings"]
    assert [s.is_selected for s in specs] == [False, True]
    assert specs[1].background == bar.config.active_bg
    assert specs[0].background == bar.config.inactive_bg
    assert specs[0].on_press == TabClicked(0)
    assert specs[0].move_left is None and specs[0].move_right is None
    assert specs[1].hover_background == bar.config.active_bg.brightened(0.08)


def test_view_with_move_buttons():
    specs = TabBar().view_with_move_buttons(["A", "B", "C"], 0)
    assert specs[0].move_left is None
    assert specs[0].move_right == TabMoved(0, 1)
    assert specs[1].move_left == TabMoved(1, 0)
    assert specs[1].move_right == TabMoved(1, 2)
    assert specs[2].move_left == TabMoved(2, 1)
    assert specs[2].move_right is None
    assert specs[0].hover_background == specs[0].background


def test_move_button_message_round_trip():
    bar = TabBar()
    labels = ["A", "B", "C"]
    move = bar.view_with_move_buttons(labels, 1)[1].move_right
    action = bar.update(move, labels, 1)
    assert labels == ["A", "C", "B"]
    assert action == Reordered(2)