import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A store operation failed."""


class RecordNotFound(StoreError):
    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class StoreUnavailable(StoreError):
    """The backing store rejected or could not serve the request; safe to retry."""


def api_exception_handler(exc, context):
    if isinstance(exc, RecordNotFound):
        return Response({'ok': False, 'error': {'code': 'not_found', 'message': str(exc)}},
                        status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, StoreError):
        logger.error("store failure in %s: %s", context.get('view'), exc)
        return Response({'ok': False, 'error': {'code': 'store_unavailable', 'message': str(exc), 'retry': True}},
                        status=status.HTTP_503_SERVICE_UNAVAILABLE)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled error", exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = 'validation_error' if resp.status_code == status.HTTP_400_BAD_REQUEST else 'api_error'
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
