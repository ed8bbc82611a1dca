"""Change notifications for open dashboards."""
from __future__ import annotations

import logging
import time

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.cache import cache
from django.utils import timezone

logger = logging.getLogger(__name__)

UPDATES_GROUP = "updates"
SUMMARY_CACHE_PREFIX = "dashboard:summary"
SUMMARY_VERSION_KEY = "dashboard:summary:version"


def summary_cache_key(day) -> str:
    version = cache.get_or_set(SUMMARY_VERSION_KEY, 0, None)
    return f"{SUMMARY_CACHE_PREFIX}:{version}:{day.isoformat()}"


def invalidate_summaries() -> None:
    # bumping the version orphans every cached day at once
    cache.set(SUMMARY_VERSION_KEY, time.time_ns(), None)


def notify_change(entity: str, action: str, key=None) -> None:
    """Drop cached summaries and tell websocket clients to re-fetch."""
    invalidate_summaries()
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    now = timezone.now()
    event = {
        "type": "broadcast.refresh",
        "entity": entity,
        "action": action,
        "key": key,
        "version": int(now.timestamp()),
        "ts": now.isoformat(),
    }
    async_to_sync(channel_layer.group_send)(UPDATES_GROUP, event)
    logger.debug("broadcast %s %s %s", entity, action, key)
