# students/management/commands/allocate_grade.py
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import SchoolManagementException
from shared.utils.academic_calendar import school_year_for_date
from students.services import ClassAllocationService


class Command(BaseCommand):
    help = 'Allocate unassigned students of a grade to its classes, best entrance score first'

    def add_arguments(self, parser):
        parser.add_argument('grade', help='Grade to allocate, e.g. 10')
        parser.add_argument(
            '--year',
            help='School year code (defaults to the current school year)',
        )
        parser.add_argument(
            '--min-score',
            default='0',
            help='Only allocate students scoring at least this much',
        )

    def handle(self, *args, **options):
        year = options.get('year') or school_year_for_date()

        try:
            result = ClassAllocationService.allocate_grade(year, options['grade'], options['min_score'])
        except SchoolManagementException as e:
            raise CommandError(e.message)

        self.stdout.write(
            self.style.SUCCESS(
                f"Grade {result.grade} ({result.year}): {result.assigned_count} assigned, "
                f"{result.unassigned_count} unassigned"
            )
        )
        for capacity in result.classes:
            self.stdout.write(f"  {capacity.name}: {capacity.remaining} seats left")

        if result.unassigned_count:
            self.stdout.write(
                self.style.WARNING("Some students could not be placed: every class is full.")
            )
