"""Activity shaping."""

from __future__ import annotations

from collections.abc import Iterable

from campvue.datasources.ridb.models import Activity
from campvue.normalize.text import title_case
from campvue.schemas import NormalizedActivity


def normalize_activity(activity: Activity) -> NormalizedActivity:
    return NormalizedActivity(id=activity.id, name=title_case(activity.name or ""))


def normalize_activities(activities: Iterable[Activity]) -> list[NormalizedActivity]:
    return [normalize_activity(a) for a in activities]
