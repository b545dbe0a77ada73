# performance/management/commands/rebuild_total_scores.py

from django.core.management.base import BaseCommand
from django.db import transaction

from performance.services import rebuild_total_scores


class Command(BaseCommand):
    help = "Recompute Employee.total_score from score events for all (or the given) employees."

    def add_arguments(self, parser):
        parser.add_argument("--employee", type=int, action="append", default=None, help="Employee pk (repeatable)")

    def handle(self, *args, **options):
        pks = options.get("employee")
        self.stdout.write("Rebuilding total scores ...")
        with transaction.atomic():
            count = rebuild_total_scores(pks)
        self.stdout.write(self.style.SUCCESS(f"Done: {count} employee(s) recomputed."))
