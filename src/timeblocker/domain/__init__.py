"""Domain layer for timeblocker application.

Services are imported lazily: the storage mappers import domain entities, and
the services import the mappers.
"""

_SERVICES = {
    "DayService": "timeblocker.domain.days",
    "SubActivityService": "timeblocker.domain.sub_activities",
    "StatisticsService": "timeblocker.domain.statistics",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
