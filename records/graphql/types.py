"""
GraphQL types for courses, students and grades
"""
import strawberry
from typing import List, Optional
from strawberry.types import Info

from records.errors import ErrorCode
from records.store import RecordStore, STUDENTS, GRADES


ErrorCodeEnum = strawberry.enum(ErrorCode, name="ErrorCode", description="Category of a rejected mutation")


def get_store(info: Info) -> RecordStore:
    """Return the record store the current request operates on"""
    return info.context.store


# ==================================================
# RECORD TYPES
# ==================================================

@strawberry.type(name="Course", description="Represents a course")
class CourseType:
    id: int
    name: str
    description: str

    @strawberry.field(description="Students enrolled in this course")
    def students(self, info: Info) -> List["StudentType"]:
        return get_store(info).filter(STUDENTS, lambda student: student.course_id == self.id)

    @strawberry.field(description="Grades recorded for this course")
    def grades(self, info: Info) -> List["GradeType"]:
        return get_store(info).filter(GRADES, lambda grade: grade.course_id == self.id)


@strawberry.type(name="Student", description="Represents a student")
class StudentType:
    id: int
    first_name: str
    last_name: str
    course_id: int

    @strawberry.field
    def course(self, info: Info) -> Optional[CourseType]:
        return get_store(info).find_course(self.course_id)

    @strawberry.field
    def grades(self, info: Info) -> List["GradeType"]:
        return get_store(info).filter(GRADES, lambda grade: grade.student_id == self.id)


@strawberry.type(name="Grade", description="Represents a grade")
class GradeType:
    id: int
    course_id: int
    student_id: int
    grade: int

    @strawberry.field
    def course(self, info: Info) -> Optional[CourseType]:
        return get_store(info).find_course(self.course_id)

    @strawberry.field
    def student(self, info: Info) -> Optional[StudentType]:
        return get_store(info).find_student(self.student_id)
