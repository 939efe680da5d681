"""Tests for the TUI session state."""

from __future__ import annotations

import pytest

from otpview.entries.models import Entry
from otpview.tui.state import (
    COPIED_INDICATOR_MS,
    DetailView,
    ListView,
    SessionState,
    ViewMode,
    filter_entries,
)


def test_initial_state(state: SessionState):
    assert state.mode == ViewMode.LIST
    assert state.query == ""
    assert len(state.filtered) == 2
    assert state.cursor == 0
    assert state.selected_index == -1
    assert state.copied is False
    assert state.copied_remaining_ms == COPIED_INDICATOR_MS


def test_filter_is_case_insensitive(entries: list[Entry]):
    assert [e.choice for e in filter_entries(entries, "git")] == ["GitHub (alice)"]
    assert [e.choice for e in filter_entries(entries, "ALICE")] == ["GitHub (alice)"]
    assert filter_entries(entries, "") == entries
    assert filter_entries(entries, "zzz") == []


def test_filter_is_idempotent(many_entries: list[Entry]):
    once = filter_entries(many_entries, "git")
    assert filter_entries(once, "git") == once


def test_query_extension_never_grows_filtered(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    previous = len(state.filtered)
    for ch in "github":
        state.append_query(ch)
        assert len(state.filtered) <= previous
        expected = [e for e in many_entries if state.query.lower() in e.choice.lower()]
        assert state.filtered == expected
        previous = len(state.filtered)


def test_append_query_resets_cursor(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.move_cursor(1)
    state.move_cursor(1)
    state.append_query("g")
    assert state.cursor == 0


def test_backspace(state: SessionState):
    state.append_query("g")
    state.append_query("x")
    assert state.filtered == []
    state.backspace()
    assert state.query == "g"
    assert len(state.filtered) == 1


def test_backspace_on_empty_query_is_noop(state: SessionState):
    state.backspace()
    assert state.query == ""
    assert len(state.filtered) == 2


def test_narrowing_query_clamps_cursor(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.page_down()
    state.set_query("aws")
    assert state.cursor == 0


def test_cursor_wraps_up_from_first(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.move_cursor(-1)
    assert state.cursor == len(many_entries) - 1


def test_cursor_wraps_down_from_last(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.page_down()
    state.move_cursor(1)
    assert state.cursor == 0


@pytest.mark.parametrize("moves", [[1] * 13, [-1] * 7, [1, -1, -1, 1, 1, 1, -1] * 3])
def test_cursor_stays_in_bounds(many_entries: list[Entry], moves: list[int]):
    state = SessionState(entries=many_entries)
    for delta in moves:
        state.move_cursor(delta)
        assert 0 <= state.cursor <= len(state.filtered) - 1


def test_cursor_on_empty_filtered_stays_zero(state: SessionState):
    state.set_query("nothing matches")
    state.move_cursor(1)
    assert state.cursor == 0
    state.move_cursor(-1)
    assert state.cursor == 0
    state.page_down()
    assert state.cursor == 0


def test_page_up_and_down(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.page_down()
    assert state.cursor == 4
    state.page_up()
    assert state.cursor == 0


def test_open_detail(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.move_cursor(1)
    assert state.open_detail() is True
    assert state.mode == ViewMode.DETAIL
    assert state.view == DetailView(index=1, visible=False)
    assert state.selected_index == 1
    assert state.selected is state.filtered[1]


def test_open_detail_with_empty_filtered_is_noop(state: SessionState):
    state.set_query("nothing matches")
    assert state.open_detail() is False
    assert state.mode == ViewMode.LIST
    assert state.selected_index == -1


def test_toggle_visible(state: SessionState):
    state.open_detail()
    assert state.code_visible is False
    state.toggle_visible()
    assert state.code_visible is True
    state.toggle_visible()
    assert state.code_visible is False


def test_toggle_visible_in_list_mode_is_noop(state: SessionState):
    state.toggle_visible()
    assert state.code_visible is False
    assert state.view == ListView()


def test_list_navigation_ignored_in_detail(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.open_detail()
    state.move_cursor(1)
    state.page_down()
    assert state.selected_index == 0


@pytest.mark.parametrize("query,moves", [("", 0), ("g", 1), ("git", 1), ("a", 2)])
def test_detail_round_trip_restores_list(many_entries: list[Entry], query: str, moves: int):
    state = SessionState(entries=many_entries)
    for ch in query:
        state.append_query(ch)
    for _ in range(moves):
        state.move_cursor(1)
    state.open_detail()
    state.toggle_visible()
    state.current_code = "123456"

    state.close_detail()

    assert state.mode == ViewMode.LIST
    assert state.query == ""
    assert state.selected_index == -1
    assert state.filtered == many_entries
    assert state.code_visible is False
    assert state.current_code == ""


def test_scenario_search_open_and_back(state: SessionState):
    assert [e.choice for e in state.filtered] == ["GitHub (alice)", "AWS"]
    for ch in "git":
        state.append_query(ch)
    assert [e.choice for e in state.filtered] == ["GitHub (alice)"]

    state.open_detail()
    assert state.selected.choice == "GitHub (alice)"

    state.close_detail()
    assert state.query == ""
    assert len(state.filtered) == 2


def test_copied_countdown_decrements_and_clears(state: SessionState):
    state.open_detail()
    state.mark_copied()
    assert state.copied is True
    assert state.copied_remaining_ms == COPIED_INDICATOR_MS

    state.tick(500)
    assert state.copied_remaining_ms == COPIED_INDICATOR_MS - 500
    assert state.copied is True

    state.tick(1499)
    assert state.copied is True
    assert state.copied_remaining_ms == 1

    state.tick(1)
    assert state.copied is False
    assert state.copied_remaining_ms == COPIED_INDICATOR_MS


def test_copied_countdown_with_custom_initial(entries: list[Entry]):
    state = SessionState(entries=entries, copied_initial_ms=10)
    state.open_detail()
    state.mark_copied()
    for _ in range(9):
        state.tick(1)
    assert state.copied is True
    state.tick(1)
    assert state.copied is False
    assert state.copied_remaining_ms == 10


def test_tick_without_copied_flag_is_noop(state: SessionState):
    state.open_detail()
    state.tick(5000)
    assert state.copied is False
    assert state.copied_remaining_ms == COPIED_INDICATOR_MS


def test_tick_in_list_mode_leaves_countdown(state: SessionState):
    state.mark_copied()
    state.tick(5000)
    assert state.copied is True
    assert state.copied_remaining_ms == COPIED_INDICATOR_MS


def test_close_detail_clears_copied(state: SessionState):
    state.open_detail()
    state.mark_copied()
    state.close_detail()
    assert state.copied is False


def test_view_mode_enum():
    assert ViewMode.LIST.value == "list"
    assert ViewMode.DETAIL.value == "detail"


def test_close_detail_keeps_cursor(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.move_cursor(1)
    state.move_cursor(1)
    state.open_detail()
    state.close_detail()
    assert state.cursor == 2


def test_close_detail_clamps_cursor(many_entries: list[Entry]):
    state = SessionState(entries=many_entries)
    state.page_down()
    state.open_detail()
    state.entries = many_entries[:2]
    state.close_detail()
    assert state.cursor == 1
