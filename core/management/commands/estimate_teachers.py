# core/management/commands/estimate_teachers.py
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import SchoolManagementException
from core.services import WorkloadEstimationService
from shared.utils.academic_calendar import school_year_for_date


class Command(BaseCommand):
    help = 'Estimate how many teachers each subject needs for a school year'

    def add_arguments(self, parser):
        parser.add_argument(
            '--year',
            help='School year code (defaults to the current school year)',
        )
        parser.add_argument('--weekly-load', type=int, help='Periods per week of a full-time teacher')
        parser.add_argument('--homeroom-reduction', type=int)
        parser.add_argument('--dept-head-reduction', type=int)

    def handle(self, *args, **options):
        year = options.get('year') or school_year_for_date()

        try:
            estimate = WorkloadEstimationService.estimate_teachers(
                year,
                weekly_load=options.get('weekly_load'),
                homeroom_reduction=options.get('homeroom_reduction'),
                dept_head_reduction=options.get('dept_head_reduction'),
            )
        except SchoolManagementException as e:
            raise CommandError(e.message)

        if not estimate.subjects:
            self.stdout.write(self.style.WARNING(f"No period demand declared for {year}"))

        for subject in estimate.subjects:
            self.stdout.write(
                f"{subject.subject_name:<24} periods={subject.total_periods:<4} "
                f"classes={subject.class_count:<3} teachers={subject.teachers_needed}"
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"\n{year}: {estimate.total_teachers_needed} subject teachers, "
                f"{estimate.homeroom_teachers_needed} homeroom teachers "
                f"({estimate.homeroom_weekly_load} periods/week), "
                f"{estimate.dept_heads_needed} department heads "
                f"({estimate.dept_head_weekly_load} periods/week)"
            )
        )
