from __future__ import annotations

import json
from datetime import datetime, time, timezone

from taskwise.services.settings_service import SettingsState

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


def test_preferences_follow_settings_groups() -> None:
    state = SettingsState()
    state.update_work_schedule(start_time=time(7), end_time=time(15), lunch_break=False)
    state.update_ai_preferences(energy_pattern="flexible", break_frequency=45)

    prefs = state.preferences()

    assert prefs.work_start_time == time(7)
    assert prefs.work_end_time == time(15)
    assert prefs.lunch_break is False
    assert prefs.energy_type == "flexible"
    assert prefs.break_frequency == 45


def test_category_management() -> None:
    state = SettingsState()
    added = state.add_category("Errands", "#f59e0b", "cart")

    assert state.update_category(added.id, color="#000000").color == "#000000"
    assert state.update_category("missing", color="#fff") is None
    assert state.delete_category(added.id) is True
    assert state.delete_category(added.id) is False
    assert [c.name for c in state.categories] == ["Work", "Personal", "Health", "Learning"]


def test_export_document_shape() -> None:
    state = SettingsState(theme="dark")

    document = json.loads(state.export_data(now=NOW))

    assert document["version"] == "1.0"
    assert document["export_date"] == NOW.isoformat()
    assert document["theme"] == "dark"
    assert document["work_schedule"]["start_time"] == "09:00:00"
    assert len(document["categories"]) == 4


def test_import_restores_exported_settings() -> None:
    source = SettingsState(theme="light")
    source.update_work_schedule(start_time=time(10), end_time=time(18))
    source.add_category("Errands", "#f59e0b", "cart")

    target = SettingsState()
    assert target.import_data(source.export_data(now=NOW)) is True

    assert target.work_schedule.start_time == time(10)
    assert target.theme == "light"
    assert [c.name for c in target.categories][-1] == "Errands"


def test_import_rejects_bad_documents_without_raising() -> None:
    state = SettingsState()

    assert state.import_data("not json") is False
    assert state.import_data("[]") is False
    assert state.import_data(json.dumps({"work_schedule": {"start_time": "09:00"}})) is False
    assert state.import_data(json.dumps({"work_schedule": {"start_time": "99:00"}, "categories": []})) is False
    assert (
        state.import_data(
            json.dumps({"work_schedule": {"start_time": "09:00"}, "categories": [{"name": "x"}]})
        )
        is False
    )
    assert state.import_data(
        json.dumps(
            {
                "work_schedule": {"start_time": "09:00"},
                "categories": [{"id": "1", "name": "Work", "color": "#fff", "icon": "briefcase"}],
                "theme": "neon",
            }
        )
    ) is False
    assert state.theme == "system"


def test_clear_all_restores_defaults() -> None:
    state = SettingsState(theme="dark")
    state.update_ai_preferences(energy_pattern="evening")
    state.add_category("Errands", "#f59e0b", "cart")

    state.clear_all()

    assert state.theme == "system"
    assert state.ai_preferences.energy_pattern == "morning"
    assert len(state.categories) == 4
