"""
Shared helpers for records tests
"""
from types import SimpleNamespace

from records.graphql.schema import schema
from records.models import Course, Student, Grade
from records.store import RecordStore


def make_store():
    """
    Build a small isolated store:
    courses 1-3, students 1-3 (1 and 2 in course 1, 3 in course 2),
    one grade for student 2 in course 1
    """
    return RecordStore(
        courses=[
            Course(id=1, name='Mathematics', description='Algebra and calculus'),
            Course(id=2, name='Physics', description='Mechanics'),
            Course(id=3, name='Literature', description='Novels'),
        ],
        students=[
            Student(id=1, first_name='Ana', last_name='Gomez', course_id=1),
            Student(id=2, first_name='Lucas', last_name='Perez', course_id=1),
            Student(id=3, first_name='Sofia', last_name='Martinez', course_id=2),
        ],
        grades=[
            Grade(id=1, course_id=1, student_id=2, grade=7),
        ],
    )


def execute(store, query, variables=None):
    """Run a GraphQL operation against ``store`` and fail loudly on GraphQL errors"""
    result = schema.execute_sync(
        query,
        variable_values=variables,
        context_value=SimpleNamespace(store=store),
    )
    if result.errors:
        raise AssertionError(f"GraphQL errors: {result.errors}")
    return result.data
