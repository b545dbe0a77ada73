from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from hr.services import refresh_working_days


class Command(BaseCommand):
    help = "Recompute working_days for active employees (daily job)."

    def add_arguments(self, parser):
        parser.add_argument("--date", type=str, default=None, help="Reference date YYYY-MM-DD (default: today)")

    def handle(self, *args, **options):
        today = timezone.localdate()
        if options.get("date"):
            try:
                today = date.fromisoformat(options["date"])
            except ValueError as exc:
                raise CommandError(f"Invalid --date {options['date']!r}") from exc

        changed = refresh_working_days(today)
        self.stdout.write(self.style.SUCCESS(f"Working days refreshed: {changed} employee(s) changed (date={today})"))
