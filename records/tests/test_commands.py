"""
Tests for the check_integrity management command
"""
import json
import os
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase


class CheckIntegrityCommandTest(SimpleTestCase):
    """Test auditing fixture directories"""

    def write_fixtures(self, directory, courses, students, grades):
        for name, payload in (('courses', courses), ('students', students), ('grades', grades)):
            with open(os.path.join(directory, f"{name}.json"), 'w', encoding='utf-8') as f:
                json.dump(payload, f)

    def test_bundled_fixtures_are_consistent(self):
        out = StringIO()
        call_command('check_integrity', stdout=out)
        self.assertIn('are consistent', out.getvalue())

    def test_consistent_directory(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.write_fixtures(
                temp_dir,
                courses=[{'id': 1, 'name': 'Mathematics', 'description': 'Numbers'}],
                students=[{'id': 1, 'firstName': 'Ana', 'lastName': 'Gomez', 'courseId': 1}],
                grades=[{'id': 1, 'courseId': 1, 'studentId': 1, 'grade': 9}],
            )
            out = StringIO()
            call_command('check_integrity', fixtures_dir=temp_dir, stdout=out)

        self.assertIn('1 courses, 1 students, 1 grades', out.getvalue())

    def test_violations_fail_the_command(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.write_fixtures(
                temp_dir,
                courses=[{'id': 1, 'name': 'Mathematics', 'description': 'Numbers'}],
                students=[{'id': 1, 'firstName': 'Ana', 'lastName': 'Gomez', 'courseId': 2}],
                grades=[],
            )
            out = StringIO()
            with self.assertRaises(CommandError):
                call_command('check_integrity', fixtures_dir=temp_dir, stdout=out)

        self.assertIn('student 1 references missing course 2', out.getvalue())
