"""
Dashboard overview endpoint.

Returns the headline stats, recent admissions, today's appointments,
department wait levels and per-ward bed occupancy in one payload.  The
rendered summary is cached per day and dropped on any mutation.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..context import get_context
from ..serializers import DateQuerySerializer
from ..services.dashboard import cached_summary


@api_view(['GET'])
def dashboard_summary(request):
    """``?date=YYYY-MM-DD`` renders the dashboard as of another day."""
    q = DateQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    context = get_context()
    today = q.validated_data.get('date') or context.today()
    return Response(cached_summary(context, today))
