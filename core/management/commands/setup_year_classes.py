# core/management/commands/setup_year_classes.py
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import SchoolManagementException
from core.services import ClassSetupService
from shared.constants import get_scheduling_setting
from shared.utils.academic_calendar import school_year_for_date


class Command(BaseCommand):
    help = 'Create the classes <grade>A1..<grade>A<count> of each grade for a school year'

    def add_arguments(self, parser):
        parser.add_argument(
            '--year',
            help='School year code (defaults to the current school year)',
        )
        parser.add_argument(
            '--grade',
            action='append',
            dest='grades',
            help='Grade to set up; repeat for several (defaults to every grade)',
        )
        parser.add_argument(
            '--count',
            type=int,
            help='Number of classes per grade',
        )
        parser.add_argument(
            '--capacity',
            type=int,
            help='Capacity of each new class',
        )

    def handle(self, *args, **options):
        year = options.get('year') or school_year_for_date()
        grades = options.get('grades') or get_scheduling_setting('GRADES')

        total_created = 0
        for grade in grades:
            try:
                created = ClassSetupService.setup_year_classes(
                    year, grade, count=options.get('count'), capacity=options.get('capacity')
                )
            except SchoolManagementException as e:
                raise CommandError(e.message)

            total_created += len(created)
            if created:
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Grade {grade}: created {', '.join(c.name for c in created)}"
                    )
                )
            else:
                self.stdout.write(self.style.WARNING(f"Grade {grade}: all classes already exist"))

        self.stdout.write(self.style.SUCCESS(f"\nDone. {total_created} classes created for {year}."))
