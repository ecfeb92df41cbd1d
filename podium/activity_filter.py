from __future__ import annotations

from enum import Enum
from typing import Iterable

from .models import Activity


class Category(str, Enum):
    ALL = "All"
    RUN = "Run"
    RIDE = "Ride"
    WALK = "Walk"
    OTHER = "Other"


TABS = (Category.ALL, Category.RUN, Category.RIDE, Category.WALK)

TAB_LABELS = {
    Category.ALL: "All activities",
    Category.RUN: "Runs",
    Category.RIDE: "Rides",
    Category.WALK: "Walks",
}

# Hikes are shown alongside walks.
WALK_TYPES = frozenset({"Walk", "Hike"})

TYPE_META = {
    "Run": {"label": "Run", "icon": "flame", "accent": "#f97316"},
    "Ride": {"label": "Ride", "icon": "bike", "accent": "#10b981"},
    "Walk": {"label": "Walk", "icon": "footprints", "accent": "#3b82f6"},
    "WeightTraining": {"label": "Weight Training", "icon": "dumbbell", "accent": "#475569"},
}
FALLBACK_TYPE_META = {"icon": "activity", "accent": "#3b82f6"}


def classify(activity: Activity) -> Category:
    if activity.type == "Run":
        return Category.RUN
    if activity.type == "Ride":
        return Category.RIDE
    if activity.type in WALK_TYPES:
        return Category.WALK
    return Category.OTHER


def _category_value(category: Category | str) -> str:
    if isinstance(category, Category):
        return category.value
    return str(category)


def filter_activities(activities: Iterable[Activity], category: Category | str) -> list[Activity]:
    """Activities belonging to a tab, in feed order.

    ``All`` keeps everything and ``Walk`` also keeps hikes. ``Category.OTHER``
    keeps every activity that ``classify`` puts in the other bucket. Any other
    value, including the plain string ``"Other"``, is compared literally against
    the activity type, so an unknown category simply matches nothing.
    """
    if category is Category.OTHER:
        return [activity for activity in activities if classify(activity) is Category.OTHER]
    value = _category_value(category)
    if value == Category.ALL.value:
        return list(activities)
    if value == Category.WALK.value:
        return [activity for activity in activities if activity.type in WALK_TYPES]
    return [activity for activity in activities if activity.type == value]


def parse_tab(raw_value: object, default: Category | str = Category.ALL) -> Category | str:
    text = str(raw_value or "").strip()
    if not text:
        return default
    for tab in TABS:
        if text.lower() == tab.value.lower():
            return tab
    return text


def tab_label(tab: Category | str) -> str:
    for known, label in TAB_LABELS.items():
        if _category_value(tab) == known.value:
            return label
    return _category_value(tab)


def type_meta(type_name: str) -> dict[str, str]:
    meta = TYPE_META.get(type_name)
    if meta:
        return dict(meta)
    return {"label": type_name or "Other", **FALLBACK_TYPE_META}
