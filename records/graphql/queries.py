"""
GraphQL queries for courses, students and grades
"""
import strawberry
from typing import List, Optional
from strawberry.types import Info

from .types import CourseType, StudentType, GradeType, get_store


@strawberry.type
class RecordsQuery:
    """
    Read-only lookups over the record store
    Lookups by id return null when nothing matches
    """

    @strawberry.field(description="List of all courses")
    def courses(self, info: Info) -> List[CourseType]:
        return get_store(info).courses

    @strawberry.field(description="List of all students")
    def students(self, info: Info) -> List[StudentType]:
        return get_store(info).students

    @strawberry.field(description="List of all grades")
    def grades(self, info: Info) -> List[GradeType]:
        return get_store(info).grades

    @strawberry.field(description="Particular course")
    def course(self, info: Info, id: int) -> Optional[CourseType]:
        return get_store(info).find_course(id)

    @strawberry.field(description="Particular student")
    def student(self, info: Info, id: int) -> Optional[StudentType]:
        return get_store(info).find_student(id)

    @strawberry.field(description="Particular grade")
    def grade(self, info: Info, id: int) -> Optional[GradeType]:
        return get_store(info).find_grade(id)
