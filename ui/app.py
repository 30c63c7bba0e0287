"""HabitGrove web UI: server-rendered dashboard, form posts and a JSON API.

All routes are thin glue over the grove actions and dashboard. HTTP Basic auth
is enforced only when HABITGROVE_USERNAME and HABITGROVE_PASSWORD are both set.
"""

from __future__ import annotations

import os
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Form, HTTPException, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel, Field, StrictBool

from grove import (
    ConfigurationError,
    ValidationError,
    workspace_root as _workspace_root,
    init_state,
    load_profile,
    load_current_state,
    load_dashboard,
    list_habits,
    history_for_habit,
    rolling_window,
    level_info,
    create_habit,
    toggle_habit,
    reset_day,
    setup_logging,
)

ASSET_V = "20261019-01"
MAX_CALENDAR_DAYS = 366


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


CSS = """
body { font-family: system-ui, sans-serif; background: #f6f8f4; color: #23301f; margin: 0; }
.container { max-width: 960px; margin: 0 auto; padding: 24px; }
.top { display: flex; justify-content: space-between; align-items: center; }
.grid { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; }
.card { background: #fff; border-radius: 12px; padding: 16px; margin-top: 16px; box-shadow: 0 1px 3px rgba(0,0,0,.08); }
.muted { color: #6b7a66; } .small { font-size: 13px; }
.habit-item { display: flex; justify-content: space-between; align-items: center; padding: 8px 0; border-bottom: 1px solid #eef2ea; }
.habit-name { margin: 0; font-weight: 600; } .habit-streak { margin: 0; font-size: 13px; color: #6b7a66; }
.habit-points-pill { background: #e5f3dd; border-radius: 999px; padding: 2px 10px; font-size: 12px; }
.progress { background: #eef2ea; border-radius: 999px; height: 10px; overflow: hidden; }
.progress > div { background: #5f9e4a; height: 100%; }
.history-item { display: flex; justify-content: space-between; padding: 4px 0; }
.history-status.done { color: #3f7d2c; } .history-status.missed { color: #b0543f; }
.calendar-grid { display: grid; grid-template-columns: repeat(7, 1fr); gap: 6px; }
.calendar-day { text-align: center; border-radius: 8px; padding: 6px 0; background: #f0f2ee; }
.calendar-day.done { background: #8cc474; } .calendar-day.partial { background: #d4ebc6; }
.calendar-day.missed { background: #f2d0c8; }
.calendar-day-label { font-weight: 600; } .calendar-day-weekday { font-size: .6rem; color: #6b7a66; }
"""

SCRIPT = """
document.querySelectorAll('[data-habit-toggle]').forEach(function (box) {
  box.addEventListener('change', function () {
    fetch('/api/habits/' + encodeURIComponent(box.dataset.habitId) + '/toggle', {
      method: 'POST',
      headers: {'Content-Type': 'application/json'},
      body: JSON.stringify({done: box.checked})
    }).then(function () { window.location.reload(); });
  });
});
var select = document.getElementById('historyHabit');
if (select) {
  select.addEventListener('change', function () {
    window.location = '/?history=' + encodeURIComponent(select.value);
  });
}
"""


# ── App ───────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    try:
        level = load_profile().log_level
    except ConfigurationError:
        level = "INFO"
    setup_logging(level, json_format=bool(os.environ.get("HABITGROVE_JSON_LOGS")))
    init_state()
    yield


app = FastAPI(title="HabitGrove UI", version="0.1.0", lifespan=lifespan)


# ── Auth ──────────────────────────────────────────────────────

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("HABITGROVE_USERNAME", "")
    expected_password = os.environ.get("HABITGROVE_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Pages ─────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(history: str | None = None, username: str = Depends(get_current_user)) -> HTMLResponse:
    root = _workspace_root()
    dash = load_dashboard(root, history_habit_id=history)
    level = dash["level"]

    habit_rows = []
    for h in dash["habits"]:
        habit_rows.append(
            f"""
            <li class="habit-item">
              <label style="display:flex; gap:10px; align-items:center">
                <input type="checkbox" data-habit-toggle data-habit-id="{_escape(h['id'])}" {'checked' if h['doneToday'] else ''} />
                <div>
                  <p class="habit-name">{_escape(h['name'])}</p>
                  <p class="habit-streak">{_escape(h['streakLabel'])}</p>
                </div>
              </label>
              <div class="habit-points-pill">{_escape(h['pointsPill'])}</div>
            </li>
            """
        )

    options = []
    for h in dash["habits"]:
        selected = "selected" if h["id"] == dash["historyHabitId"] else ""
        options.append(f'<option value="{_escape(h["id"])}" {selected}>{_escape(h["name"])}</option>')

    history_rows = []
    for e in dash["history"]:
        cls = "done" if e["done"] else "missed"
        history_rows.append(
            f'<li class="history-item"><span class="history-date">{_escape(e["label"])}</span>'
            f'<span class="history-status {cls}">{"Done" if e["done"] else "Missed"}</span></li>'
        )

    calendar_cells = []
    for c in dash["calendar"]:
        quality = c["quality"] if c["quality"] != "unrecorded" else ""
        calendar_cells.append(
            f'<div class="calendar-day {quality}" title="{_escape(c["day"])}">'
            f'<div class="calendar-day-label">{c["dayNumber"]}</div>'
            f'<div class="calendar-day-weekday">{_escape(c["weekday"])}</div></div>'
        )

    html = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>HabitGrove</title>
  <style>{CSS}</style>
</head>
<body>
  <div class="container">
    <header class="top">
      <div>
        <h1>HabitGrove</h1>
        <div class="muted">{_escape(dash['todayLabel'])}</div>
      </div>
      <div class="card" style="min-width:240px">
        <div><b>{dash['points']}</b> pts · <b>{_escape(level['label'])}</b></div>
        <div class="progress"><div style="width:{level['progressPercent']}%"></div></div>
        <div class="muted small">{_escape(level['caption'])}</div>
      </div>
    </header>

    <section class="grid">
      <div class="card">
        <h2>Today</h2>
        <ul style="list-style:none; padding:0">
          {''.join(habit_rows) if habit_rows else '<li class="muted small">No habits yet. Add one below.</li>'}
        </ul>
        <form method="post" action="/add_habit" style="display:flex; gap:8px">
          <input name="name" type="text" placeholder="New habit" />
          <button type="submit">Add</button>
        </form>
        <form method="post" action="/clear_today" style="margin-top:8px">
          <button type="submit">Clear today</button>
        </form>
      </div>

      <div class="card">
        <h2>History</h2>
        <select id="historyHabit">{''.join(options)}</select>
        <ul style="list-style:none; padding:0">
          {''.join(history_rows) if history_rows else '<li class="muted small">(no history yet)</li>'}
        </ul>
      </div>
    </section>

    <section class="card">
      <h2>Last {len(dash['calendar'])} days</h2>
      <div class="calendar-grid">{''.join(calendar_cells)}</div>
    </section>
    <footer class="muted small">v0.1 · {ASSET_V} · <code>{_escape(str(root))}</code></footer>
  </div>
  <script>{SCRIPT}</script>
</body>
</html>"""
    return HTMLResponse(html)


@app.post("/add_habit")
def add_habit_form(name: str = Form(""), username: str = Depends(get_current_user)) -> RedirectResponse:
    # Blank names are a silent no-op on the form
    create_habit(name)
    return RedirectResponse(url="/", status_code=303)


@app.post("/clear_today")
def clear_today_form(username: str = Depends(get_current_user)) -> RedirectResponse:
    reset_day()
    return RedirectResponse(url="/", status_code=303)


# ── JSON API ──────────────────────────────────────────────────

@app.get("/api/state")
def api_get_state(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Full state snapshot."""
    state, _today = load_current_state()
    return state.to_dict()


@app.get("/api/dashboard")
def api_get_dashboard(history: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    return load_dashboard(history_habit_id=history)


@app.get("/api/habits")
def api_list_habits(username: str = Depends(get_current_user)) -> dict[str, Any]:
    state, _today = load_current_state()
    habits = list_habits(state)
    return {"count": len(habits), "habits": [h.to_dict() for h in habits]}


# ── Request bodies ────────────────────────────────────────────

class HabitCreate(BaseModel):
    name: str = ""


class ToggleRequest(BaseModel):
    done: StrictBool = True
    day: str | None = Field(default=None, description="DayKey (YYYY-MM-DD); defaults to today")


class DayRequest(BaseModel):
    day: str | None = Field(default=None, description="DayKey (YYYY-MM-DD); defaults to today")


def _raise_for(result: dict[str, Any]) -> dict[str, Any]:
    if not result["ok"]:
        code = 404 if result["reason"] == "not_found" else 400
        raise HTTPException(status_code=code, detail=result["error"])
    return result


@app.post("/api/habits")
def api_create_habit(payload: HabitCreate, username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _raise_for(create_habit(payload.name))


@app.post("/api/habits/{habit_id}/toggle")
def api_toggle_habit(
    habit_id: str,
    payload: ToggleRequest | None = None,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    payload = payload or ToggleRequest()
    return _raise_for(toggle_habit(habit_id, payload.done, day=payload.day))


@app.post("/api/days/clear")
def api_clear_day(payload: DayRequest | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    payload = payload or DayRequest()
    return _raise_for(reset_day(payload.day))


@app.get("/api/history/{habit_id}")
def api_habit_history(habit_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    state, _today = load_current_state()
    entries = history_for_habit(state, habit_id)
    return {"habitId": habit_id, "count": len(entries), "entries": [e.to_dict() for e in entries]}


@app.get("/api/calendar")
def api_calendar(
    days: int | None = Query(default=None, ge=1, le=MAX_CALENDAR_DAYS),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    profile = load_profile()
    state, today = load_current_state()
    try:
        cells = rolling_window(state, today, days if days is not None else profile.calendar_days)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"today": today, "days": [c.to_dict() for c in cells]}


@app.get("/api/level")
def api_level(username: str = Depends(get_current_user)) -> dict[str, Any]:
    profile = load_profile()
    state, _today = load_current_state()
    return {"points": state.points, **level_info(state.points, profile.tiers).to_dict()}
