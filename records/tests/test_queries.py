"""
Tests for GraphQL queries
"""
from django.test import SimpleTestCase

from .helpers import make_store, execute


class ListQueryTest(SimpleTestCase):
    """Test list-all queries"""

    def setUp(self):
        self.store = make_store()

    def test_list_courses(self):
        data = execute(self.store, "{ courses { id name description } }")
        self.assertEqual(
            data['courses'][0],
            {'id': 1, 'name': 'Mathematics', 'description': 'Algebra and calculus'}
        )
        self.assertEqual([c['id'] for c in data['courses']], [1, 2, 3])

    def test_list_students_in_insertion_order(self):
        self.store.add_student('Mateo', 'Rodriguez', 3)
        data = execute(self.store, "{ students { id firstName lastName courseId } }")

        self.assertEqual([s['id'] for s in data['students']], [1, 2, 3, 4])
        self.assertEqual(data['students'][3]['firstName'], 'Mateo')

    def test_list_grades(self):
        data = execute(self.store, "{ grades { id courseId studentId grade } }")
        self.assertEqual(
            data['grades'],
            [{'id': 1, 'courseId': 1, 'studentId': 2, 'grade': 7}]
        )


class LookupQueryTest(SimpleTestCase):
    """Test lookups by id and relational fields"""

    def setUp(self):
        self.store = make_store()

    def test_course_by_id(self):
        data = execute(self.store, "{ course(id: 2) { id name } }")
        self.assertEqual(data['course'], {'id': 2, 'name': 'Physics'})

    def test_missing_records_are_null(self):
        """Unknown ids resolve to null without errors"""
        data = execute(
            self.store,
            "{ course(id: 99) { id } student(id: 99) { id } grade(id: 99) { id } }"
        )
        self.assertEqual(data, {'course': None, 'student': None, 'grade': None})

    def test_student_course(self):
        """Student.course resolves through courseId"""
        data = execute(self.store, "{ student(id: 3) { firstName course { name } } }")
        self.assertEqual(data['student'], {'firstName': 'Sofia', 'course': {'name': 'Physics'}})

    def test_grade_course_and_student(self):
        data = execute(
            self.store,
            "{ grade(id: 1) { grade course { id } student { id lastName } } }"
        )
        self.assertEqual(
            data['grade'],
            {'grade': 7, 'course': {'id': 1}, 'student': {'id': 2, 'lastName': 'Perez'}}
        )

    def test_relations_are_resolved_per_request(self):
        """Relational fields reflect the store at query time"""
        self.store.find_student(3).course_id = 3
        data = execute(self.store, "{ student(id: 3) { course { id } } }")
        self.assertEqual(data['student']['course'], {'id': 3})

    def test_course_students_and_grades(self):
        data = execute(
            self.store,
            "{ course(id: 1) { students { id } grades { id } } }"
        )
        self.assertEqual(data['course']['students'], [{'id': 1}, {'id': 2}])
        self.assertEqual(data['course']['grades'], [{'id': 1}])

    def test_student_grades(self):
        data = execute(self.store, "{ student(id: 2) { grades { grade } } }")
        self.assertEqual(data['student']['grades'], [{'grade': 7}])
