"""View models for host-facing pages."""

from .host_calendar import (
    DayMetaDraft,
    HostCalendarSession,
    HostCalendarState,
    InspectorView,
    StatusChange,
    apply_saved_meta,
    begin_status_change,
    close_inspector,
    confirm_status_change,
    edit_draft,
    inspector_view,
    load_month,
    open_day,
    rollback_status_change,
    shift_month,
)

__all__ = [
    "DayMetaDraft",
    "HostCalendarSession",
    "HostCalendarState",
    "InspectorView",
    "StatusChange",
    "apply_saved_meta",
    "begin_status_change",
    "close_inspector",
    "confirm_status_change",
    "edit_draft",
    "inspector_view",
    "load_month",
    "open_day",
    "rollback_status_change",
    "shift_month",
]
