"""Management command to re-parse raw last-purchase dates."""

from django.core.management.base import BaseCommand

from goldpoints.services import ledger


class Command(BaseCommand):
    help = "Re-parse every raw last-purchase string into a calendar date"

    def handle(self, *args, **options):
        changed = ledger.normalize_dates()
        self.stdout.write(
            self.style.SUCCESS(f"Normalized {changed} purchase dates.")
        )
