import logging

from asgiref.sync import async_to_sync
from django.http import JsonResponse

from ..context import get_context

logger = logging.getLogger(__name__)


def healthz(request):
    context = get_context()
    checks = {}
    for entity, store in context.stores.by_entity().items():
        try:
            async_to_sync(store.get_all)()
            checks[entity] = True
        except Exception as exc:
            logger.error("health check: %s store failed: %s", entity, exc)
            checks[entity] = False
    ok = all(checks.values())
    return JsonResponse({'ok': ok, 'stores': checks}, status=200 if ok else 503)
