"""
Management command to audit seed fixtures for broken references
Run before shipping new fixture files
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from records.store import RecordStore
from records.validators import find_integrity_violations


class Command(BaseCommand):
    help = 'Load course, student and grade fixtures and report referential integrity violations'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fixtures-dir',
            type=str,
            default=None,
            help='Directory holding courses.json, students.json and grades.json '
                 '(default: RECORDS_FIXTURES_DIR setting)'
        )

    def handle(self, *args, **options):
        """Execute the command"""
        fixtures_dir = options['fixtures_dir'] or settings.RECORDS_FIXTURES_DIR

        store = RecordStore.from_fixtures(fixtures_dir)
        violations = find_integrity_violations(store)

        if violations:
            for violation in violations:
                self.stdout.write(self.style.ERROR(violation))
            raise CommandError(
                f"Found {len(violations)} integrity violation(s) in {fixtures_dir}"
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"Fixtures in {fixtures_dir} are consistent: "
                f"{len(store.courses)} courses, {len(store.students)} students, "
                f"{len(store.grades)} grades"
            )
        )
