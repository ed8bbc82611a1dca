from django.core.management.base import BaseCommand
from django.utils import timezone

from dashboard.context import get_context
from dashboard.services.broadcast import notify_change
from dashboard.services.calendar import add_days
from dashboard.services.dashboard import cached_summary


class Command(BaseCommand):
    help = "Rebuild the cached dashboard summary and broadcast a WebSocket refresh event."

    def add_arguments(self, parser):
        parser.add_argument('--days', type=int, default=1,
                            help="Number of days, starting today, to warm.")

    def handle(self, *args, **options):
        context = get_context()
        # drop stale summaries and tell open dashboards first
        notify_change('dashboard', 'refreshed')
        today = context.today()
        days = [add_days(today, offset) for offset in range(max(options['days'], 1))]
        for day in days:
            cached_summary(context, day, refresh=True)
        self.stdout.write(self.style.SUCCESS(
            f"Refreshed {len(days)} dashboard summaries at {timezone.now()}"
        ))
