#!/usr/bin/env python3
"""HabitGrove TUI — interactive terminal habit tracker powered by Textual."""

from __future__ import annotations

import sys
from typing import Any

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from grove import (
    ConfigurationError,
    create_habit,
    init_state,
    load_dashboard,
    load_profile,
    reset_day,
    setup_logging,
    toggle_habit,
    workspace_root,
)


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
}

#left-pane {
    width: 1fr;
    min-width: 30;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#right-pane {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.habit-row {
    height: auto;
    padding: 0 0;
    margin: 0 0;
}

.habit-row Checkbox {
    width: 1fr;
    height: auto;
    padding: 0 1 0 0;
}

.habit-done Checkbox {
    text-style: strike;
}

.habit-streak {
    width: auto;
    color: $text-muted;
    padding: 1 1 0 1;
}

.habit-pill {
    width: auto;
    color: $success;
    padding: 1 0 0 1;
}

#add-habit {
    margin: 1 0 0 0;
}

#level-info {
    height: auto;
    padding: 1 2;
    border: tall $primary-background-darken-2;
}

#history-table {
    height: 1fr;
}

#calendar-strip {
    height: auto;
    padding: 0 1;
}
"""

QUALITY_STYLE = {
    "done": "bold black on green",
    "partial": "black on yellow",
    "missed": "white on red",
    "unrecorded": "dim",
}


# ── Custom widgets ─────────────────────────────────────────────


class HabitRow(Horizontal):
    """A single habit for today: checkbox + streak + points pill."""

    def __init__(self, habit: dict[str, Any], **kwargs) -> None:
        super().__init__(**kwargs)
        self.habit = habit

    def compose(self) -> ComposeResult:
        yield Checkbox(self.habit["name"], value=self.habit["doneToday"], id=f"cb-{self.habit['id']}")
        yield Label(self.habit["streakLabel"], classes="habit-streak")
        yield Label(self.habit["pointsPill"], classes="habit-pill")

    def on_mount(self) -> None:
        self.add_class("habit-row")
        if self.habit["doneToday"]:
            self.add_class("habit-done")


def _level_text(dash: dict[str, Any]) -> str:
    level = dash["level"]
    filled = level["progressPercent"] // 5
    bar = "█" * filled + "░" * (20 - filled)
    return (
        f"[b]{dash['points']}[/b] pts · [b]{level['label']}[/b]\n"
        f"{bar} {level['progressPercent']}%\n"
        f"{level['caption']}"
    )


def _calendar_text(dash: dict[str, Any]) -> str:
    cells = []
    for c in dash["calendar"]:
        style = QUALITY_STYLE.get(c["quality"], "")
        cells.append(f"[{style}] {c['weekday']}{c['dayNumber']:>2} [/]")
    rows = [" ".join(cells[i:i + 7]) for i in range(0, len(cells), 7)]
    return "\n".join(rows)


# ── Main app ───────────────────────────────────────────────────


class HabitGroveApp(App):
    """HabitGrove — interactive terminal habit tracker."""

    TITLE = "HabitGrove"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("a", "focus_add", "Add habit"),
        Binding("h", "next_history", "History"),
        Binding("c", "clear_today", "Clear today"),
        Binding("r", "refresh", "Refresh"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._dash: dict[str, Any] = {}
        self._history_habit_id: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(
            VerticalScroll(
                Label("Today", classes="section-title"),
                Vertical(id="habit-list"),
                Input(placeholder="New habit… (enter to add)", id="add-habit"),
                id="left-pane",
                can_focus=False,
            ),
            Vertical(
                Label("Level", classes="section-title"),
                Static(id="level-info"),
                Label("Last days", classes="section-title"),
                Static(id="calendar-strip"),
                Label("History", id="history-title", classes="section-title"),
                DataTable(id="history-table"),
                id="right-pane",
            ),
            id="main-layout",
        )
        yield Footer()

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#history-table", DataTable)
        table.add_columns("Date", "Status")
        self._load_data()

    def _load_data(self) -> None:
        """Rebuild every panel from a fresh dashboard snapshot."""
        self._dash = load_dashboard(history_habit_id=self._history_habit_id)
        self._history_habit_id = self._dash["historyHabitId"]
        self.sub_title = self._dash["todayLabel"]

        habit_list = self.query_one("#habit-list", Vertical)
        habit_list.remove_children()
        for habit in self._dash["habits"]:
            habit_list.mount(HabitRow(habit))

        self.query_one("#level-info", Static).update(_level_text(self._dash))
        self.query_one("#calendar-strip", Static).update(_calendar_text(self._dash))

        names = {h["id"]: h["name"] for h in self._dash["habits"]}
        title = names.get(self._history_habit_id or "", "")
        self.query_one("#history-title", Label).update(f"History · {title}" if title else "History")

        table: DataTable = self.query_one("#history-table", DataTable)
        table.clear()
        for e in self._dash["history"]:
            table.add_row(e["label"], "Done" if e["done"] else "Missed")

    # ── Mutations ──────────────────────────────────────────────

    @on(Checkbox.Changed)
    def _on_checkbox_toggle(self, event: Checkbox.Changed) -> None:
        habit_id = (event.checkbox.id or "").removeprefix("cb-")
        if habit_id:
            self._do_toggle(habit_id, event.value)

    @work(thread=True, group="mutations")
    def _do_toggle(self, habit_id: str, done: bool) -> None:
        result = toggle_habit(habit_id, done)
        if not result.get("saved", True):
            self.call_from_thread(self.notify, "Could not save habit data", severity="warning")
        self.call_from_thread(self._load_data)

    @on(Input.Submitted, "#add-habit")
    def _on_add_habit(self, event: Input.Submitted) -> None:
        name = event.value
        event.input.value = ""
        self._do_add(name)

    @work(thread=True, group="mutations")
    def _do_add(self, name: str) -> None:
        result = create_habit(name)
        if not result["ok"]:
            self.call_from_thread(self.notify, result["error"], title="Not added", severity="warning")
            return
        self.call_from_thread(self._load_data)

    def action_clear_today(self) -> None:
        self._do_clear()

    @work(thread=True, group="mutations")
    def _do_clear(self) -> None:
        result = reset_day()
        if result["pointsDelta"]:
            self.call_from_thread(self.notify, f"Cleared today ({result['pointsDelta']} pts)")
        self.call_from_thread(self._load_data)

    # ── Navigation ─────────────────────────────────────────────

    def action_focus_add(self) -> None:
        self.query_one("#add-habit", Input).focus()

    def action_next_history(self) -> None:
        ids = [h["id"] for h in self._dash.get("habits", [])]
        if not ids:
            return
        try:
            idx = ids.index(self._history_habit_id)
        except ValueError:
            idx = -1
        self._history_habit_id = ids[(idx + 1) % len(ids)]
        self._load_data()

    def action_refresh(self) -> None:
        self._load_data()

    def action_blur_focus(self) -> None:
        self.set_focus(None)

    def action_quit_app(self) -> None:
        self.exit()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    try:
        profile = load_profile()
    except ConfigurationError as e:
        print(f"Invalid configuration in {workspace_root()}: {e}")
        sys.exit(1)
    # Keep INFO chatter off the terminal the TUI is drawing on
    level = profile.log_level if profile.log_level not in ("DEBUG", "INFO") else "WARNING"
    setup_logging(level)
    init_state()

    app = HabitGroveApp()
    app.run()


if __name__ == "__main__":
    main()
