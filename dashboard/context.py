"""
Runtime context handed to views and commands.

The context bundles the entity stores with the clock that defines
"today".  It is built once in :meth:`DashboardConfig.ready` and looked up
through :func:`get_context`; tests swap it with :func:`use_context`.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from django.apps import apps
from django.conf import settings
from django.utils import timezone

from .stores import StoreSet, build_stores


@dataclass
class DashboardContext:
    stores: StoreSet
    clock: Callable[[], date] = field(default=timezone.localdate)
    week_starts_on: int = 6

    def today(self) -> date:
        return self.clock()


def build_context(backend: str | None = None) -> DashboardContext:
    return DashboardContext(
        stores=build_stores(backend),
        week_starts_on=settings.DASHBOARD_WEEK_STARTS_ON,
    )


def get_context() -> DashboardContext:
    return apps.get_app_config('dashboard').context


@contextmanager
def use_context(context: DashboardContext):
    config = apps.get_app_config('dashboard')
    previous = config.context
    config.context = context
    try:
        yield context
    finally:
        config.context = previous
