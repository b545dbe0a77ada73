
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from awards.exceptions import AwardGenerationError
from awards.services import RANKING_SCORES, generate


class Command(BaseCommand):
    help = "Generate the annual awards of a year."

    def add_arguments(self, parser):
        parser.add_argument("year", type=int)
        parser.add_argument("--force", action="store_true", help="Replace awards already generated for the year")
        parser.add_argument("--ranking-score", choices=RANKING_SCORES, default=None,
                            help="Rank on the lifetime total or on the year's score events")

    def handle(self, *args, **options):
        year = options["year"]
        try:
            result = generate(year, force_regenerate=options["force"], ranking_score=options["ranking_score"])
        except AwardGenerationError as exc:
            raise CommandError(exc.message) from exc
        except ValidationError as exc:
            raise CommandError("; ".join(exc.messages)) from exc

        stats = result.statistics
        for award in result.awards:
            self.stdout.write(
                f"#{award.rank:<3} {award.employee.employee_id:<20} {award.get_award_level_display():<6} "
                f"{award.final_score:>6} {award.bonus_amount:>6}"
            )
        self.stdout.write(self.style.SUCCESS(
            f"{year}: {stats['awardedEmployees']} award(s) for {stats['qualifiedEmployees']} qualified of "
            f"{stats['totalEmployees']} employee(s), bonus total {stats['totalBonusAmount']}"
        ))
