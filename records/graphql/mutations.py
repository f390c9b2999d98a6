"""
GraphQL mutations for courses, students and grades
"""
import logging

import strawberry
from typing import List, Optional
from strawberry.types import Info

from records.errors import RecordError
from records.store import COURSES, STUDENTS, GRADES
from records.validators import RecordValidator
from .types import CourseType, StudentType, GradeType, ErrorCodeEnum, get_store

logger = logging.getLogger(__name__)


# ==================================================
# RESPONSE TYPES
# ==================================================

@strawberry.type
class CourseMutationResponse:
    """Response for course mutations"""
    success: bool
    message: str
    error_code: Optional[ErrorCodeEnum] = None
    course: Optional[CourseType] = None


@strawberry.type
class StudentMutationResponse:
    """Response for student mutations"""
    success: bool
    message: str
    error_code: Optional[ErrorCodeEnum] = None
    student: Optional[StudentType] = None


@strawberry.type
class GradeMutationResponse:
    """
    Response for grade mutations
    existing_grade holds the conflicting grade when a duplicate is rejected
    """
    success: bool
    message: str
    error_code: Optional[ErrorCodeEnum] = None
    grade: Optional[GradeType] = None
    existing_grade: Optional[GradeType] = None


@strawberry.type
class DeleteMutationResponse:
    """Response for delete mutations, listing every record removed"""
    success: bool
    message: str
    error_code: Optional[ErrorCodeEnum] = None
    deleted_id: Optional[int] = None
    deleted_student_ids: List[int] = strawberry.field(default_factory=list)
    deleted_grade_ids: List[int] = strawberry.field(default_factory=list)


def rejected(response_class, operation: str, error: RecordError, **extra):
    """
    Build a failed response of ``response_class`` from a validation error
    Extra keyword arguments are passed through as response fields
    """
    logger.info("%s rejected: %s", operation, error)
    return response_class(success=False, message=error.message, error_code=error.code, **extra)


@strawberry.type
class RecordsMutation:
    """
    Create, update and delete operations

    Every mutation validates and mutates while holding the store lock, so it
    either applies completely or leaves the store untouched.
    """

    # ==================================================
    # ADD
    # ==================================================

    @strawberry.mutation(description="Add a student")
    def add_student(
        self,
        info: Info,
        first_name: str,
        last_name: str,
        course_id: int
    ) -> StudentMutationResponse:
        """Add a student to an existing course"""
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_student(store, course_id)
            if not is_valid:
                return rejected(StudentMutationResponse, 'addStudent', error)

            student = store.add_student(first_name, last_name, course_id)

        logger.info("Added student %s to course %s", student.id, course_id)
        return StudentMutationResponse(
            success=True,
            message="Student added successfully",
            student=student
        )

    @strawberry.mutation(description="Add a course")
    def add_course(self, info: Info, name: str, description: str) -> CourseMutationResponse:
        store = get_store(info)
        course = store.add_course(name, description)

        logger.info("Added course %s", course.id)
        return CourseMutationResponse(
            success=True,
            message="Course added successfully",
            course=course
        )

    @strawberry.mutation(description="Add a grade")
    def add_grade(
        self,
        info: Info,
        course_id: int,
        student_id: int,
        grade: int
    ) -> GradeMutationResponse:
        """
        Record a grade for a student in the course they are enrolled in

        Only one grade can exist per (student, course) pair; a second one
        is rejected with the existing grade attached, use updateGrade instead.
        """
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_grade_creation(store, course_id, student_id)
            if not is_valid:
                return rejected(
                    GradeMutationResponse, 'addGrade', error,
                    existing_grade=error.existing_grade
                )

            record = store.add_grade(course_id, student_id, grade)

        logger.info("Added grade %s for student %s in course %s", record.id, student_id, course_id)
        return GradeMutationResponse(
            success=True,
            message="Grade added successfully",
            grade=record
        )

    # ==================================================
    # UPDATE
    # ==================================================

    @strawberry.mutation(description="Update a student")
    def update_student(
        self,
        info: Info,
        id: int,
        first_name: str,
        last_name: str,
        course_id: int
    ) -> StudentMutationResponse:
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_student_update(store, id, course_id)
            if not is_valid:
                return rejected(StudentMutationResponse, 'updateStudent', error)

            student = store.find_student(id)
            student.first_name = first_name
            student.last_name = last_name
            student.course_id = course_id

        logger.info("Updated student %s", id)
        return StudentMutationResponse(
            success=True,
            message="Student updated successfully",
            student=student
        )

    @strawberry.mutation(description="Update a course")
    def update_course(
        self,
        info: Info,
        id: int,
        name: str,
        description: str
    ) -> CourseMutationResponse:
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_course_update(store, id)
            if not is_valid:
                return rejected(CourseMutationResponse, 'updateCourse', error)

            course = store.find_course(id)
            course.name = name
            course.description = description

        logger.info("Updated course %s", id)
        return CourseMutationResponse(
            success=True,
            message="Course updated successfully",
            course=course
        )

    @strawberry.mutation(description="Update a grade")
    def update_grade(
        self,
        info: Info,
        id: int,
        course_id: int,
        student_id: int,
        grade: int
    ) -> GradeMutationResponse:
        """
        Overwrite a grade, which may move it to another (course, student) pair

        The new pair must satisfy the same rules as addGrade.
        """
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_grade_update(store, id, course_id, student_id)
            if not is_valid:
                return rejected(
                    GradeMutationResponse, 'updateGrade', error,
                    existing_grade=error.existing_grade
                )

            record = store.find_grade(id)
            record.course_id = course_id
            record.student_id = student_id
            record.grade = grade

        logger.info("Updated grade %s", id)
        return GradeMutationResponse(
            success=True,
            message="Grade updated successfully",
            grade=record
        )

    # ==================================================
    # DELETE
    # ==================================================

    @strawberry.mutation(description="Delete a student and their grades")
    def delete_student(self, info: Info, id: int) -> DeleteMutationResponse:
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_student_deletion(store, id)
            if not is_valid:
                return rejected(DeleteMutationResponse, 'deleteStudent', error)

            grades = store.remove_where(GRADES, lambda grade: grade.student_id == id)
            store.remove_where(STUDENTS, lambda student: student.id == id)

        logger.info("Deleted student %s with %d grade(s)", id, len(grades))
        return DeleteMutationResponse(
            success=True,
            message="Student deleted successfully",
            deleted_id=id,
            deleted_student_ids=[id],
            deleted_grade_ids=[grade.id for grade in grades]
        )

    @strawberry.mutation(description="Delete a course without enrolled students")
    def delete_course(self, info: Info, id: int) -> DeleteMutationResponse:
        """
        Delete a course that no student is enrolled in

        Courses with students are rejected; use deleteCourseWithAllStudents.
        """
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_course_deletion(store, id)
            if not is_valid:
                return rejected(DeleteMutationResponse, 'deleteCourse', error)

            grades = store.remove_where(GRADES, lambda grade: grade.course_id == id)
            store.remove_where(COURSES, lambda course: course.id == id)

        logger.info("Deleted course %s", id)
        return DeleteMutationResponse(
            success=True,
            message="Course deleted successfully",
            deleted_id=id,
            deleted_grade_ids=[grade.id for grade in grades]
        )

    @strawberry.mutation(description="Delete a course with all its students")
    def delete_course_with_all_students(self, info: Info, id: int) -> DeleteMutationResponse:
        """
        Delete a course, every student enrolled in it and the grades of both
        """
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_course_cascade_deletion(store, id)
            if not is_valid:
                return rejected(DeleteMutationResponse, 'deleteCourseWithAllStudents', error)

            students = store.remove_where(STUDENTS, lambda student: student.course_id == id)
            student_ids = {student.id for student in students}
            grades = store.remove_where(
                GRADES,
                lambda grade: grade.course_id == id or grade.student_id in student_ids
            )
            store.remove_where(COURSES, lambda course: course.id == id)

        logger.info(
            "Deleted course %s with %d student(s) and %d grade(s)",
            id, len(students), len(grades)
        )
        return DeleteMutationResponse(
            success=True,
            message="Course and its students deleted successfully",
            deleted_id=id,
            deleted_student_ids=[student.id for student in students],
            deleted_grade_ids=[grade.id for grade in grades]
        )

    @strawberry.mutation(description="Delete a grade")
    def delete_grade(self, info: Info, id: int) -> DeleteMutationResponse:
        store = get_store(info)

        with store.lock:
            is_valid, error = RecordValidator.validate_grade_deletion(store, id)
            if not is_valid:
                return rejected(DeleteMutationResponse, 'deleteGrade', error)

            store.remove_where(GRADES, lambda grade: grade.id == id)

        logger.info("Deleted grade %s", id)
        return DeleteMutationResponse(
            success=True,
            message="Grade deleted successfully",
            deleted_id=id,
            deleted_grade_ids=[id]
        )
