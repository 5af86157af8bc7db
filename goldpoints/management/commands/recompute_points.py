"""Management command to recompute accrued points from the sales ledger."""

from django.core.management.base import BaseCommand

from goldpoints.services import points


class Command(BaseCommand):
    help = "Recompute total points for every customer from current net weight"

    def handle(self, *args, **options):
        processed = points.recompute()
        self.stdout.write(
            self.style.SUCCESS(f"Recomputed points for {processed} customers.")
        )
