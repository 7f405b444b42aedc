"""Pacing, weekly histogram, and dashboard statistics."""

from .dashboard import Dashboard, build_dashboard, recent_readings
from .pacing import (
    PacingSummary,
    PlanDay,
    daily_target,
    days_remaining,
    pacing_summary,
    plan_preview,
)
from .weekly import DayBucket, this_week_chapters, weekly_histogram

__all__ = [
    "Dashboard",
    "build_dashboard",
    "recent_readings",
    "PacingSummary",
    "PlanDay",
    "daily_target",
    "days_remaining",
    "pacing_summary",
    "plan_preview",
    "DayBucket",
    "this_week_chapters",
    "weekly_histogram",
]
