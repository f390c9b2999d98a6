"""
Referential integrity checks for course, student and grade mutations
"""
from collections import Counter
from dataclasses import replace
from typing import List, Optional, Tuple

from .errors import RecordError
from .models import Grade
from .store import RecordStore, COURSES, STUDENTS, GRADES

ValidationResult = Tuple[bool, Optional[RecordError]]

VALID: ValidationResult = (True, None)


# ==================================================
# PREDICATES
# ==================================================

def course_exists(store: RecordStore, course_id: int) -> bool:
    return store.find_course(course_id) is not None


def student_exists(store: RecordStore, student_id: int) -> bool:
    return store.find_student(student_id) is not None


def student_enrolled_in(store: RecordStore, student_id: int, course_id: int) -> bool:
    return store.find(
        STUDENTS,
        lambda student: student.id == student_id and student.course_id == course_id
    ) is not None


def grade_exists(
    store: RecordStore,
    student_id: int,
    course_id: int,
    exclude_id: Optional[int] = None
) -> Optional[Grade]:
    """
    Find the grade already recorded for a (student, course) pair

    Args:
        exclude_id: Grade id to ignore, used when that grade is being updated

    Returns:
        The existing grade, or None
    """
    return store.find(
        GRADES,
        lambda grade: (
            grade.student_id == student_id
            and grade.course_id == course_id
            and grade.id != exclude_id
        )
    )


def course_has_students(store: RecordStore, course_id: int) -> bool:
    return store.find(STUDENTS, lambda student: student.course_id == course_id) is not None


# ==================================================
# ERROR MESSAGES
# ==================================================

def course_not_found(course_id: int) -> RecordError:
    return RecordError.not_found(f"Course with id {course_id} is not found")


def student_not_found(student_id: int) -> RecordError:
    return RecordError.not_found(f"Student with id {student_id} is not found")


def grade_not_found(grade_id: int) -> RecordError:
    return RecordError.not_found(f"Grade with id {grade_id} is not found")


def duplicate_grade(existing: Grade) -> RecordError:
    return RecordError.conflict(
        f"Grade for student id {existing.student_id} in course id {existing.course_id} "
        f"already exists, use updateGrade to change it",
        existing_grade=replace(existing)
    )


class RecordValidator:
    """
    Validates mutations against the current store contents

    Each check runs in a fixed priority order and the first failing check
    decides the error. All methods return (is_valid, error).
    """

    @staticmethod
    def validate_student(store: RecordStore, course_id: int) -> ValidationResult:
        """Check that a new student's course exists"""
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        return VALID

    @staticmethod
    def validate_student_update(
        store: RecordStore,
        student_id: int,
        course_id: int
    ) -> ValidationResult:
        if not student_exists(store, student_id):
            return False, student_not_found(student_id)
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        return VALID

    @staticmethod
    def validate_student_deletion(store: RecordStore, student_id: int) -> ValidationResult:
        if not student_exists(store, student_id):
            return False, student_not_found(student_id)
        return VALID

    @staticmethod
    def validate_course_update(store: RecordStore, course_id: int) -> ValidationResult:
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        return VALID

    @staticmethod
    def validate_course_cascade_deletion(store: RecordStore, course_id: int) -> ValidationResult:
        """Check a course removal that takes its students along"""
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        return VALID

    @staticmethod
    def validate_course_deletion(store: RecordStore, course_id: int) -> ValidationResult:
        """
        Check that a course can be removed on its own

        A course that still has enrolled students can only be removed
        through deleteCourseWithAllStudents.
        """
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        if course_has_students(store, course_id):
            return False, RecordError.conflict(
                f"Course with id {course_id} has students enrolled and cannot be deleted, "
                f"use deleteCourseWithAllStudents instead"
            )
        return VALID

    @staticmethod
    def validate_grade_creation(
        store: RecordStore,
        course_id: int,
        student_id: int
    ) -> ValidationResult:
        """
        Check a new grade for a (course, student) pair

        Order: course exists, student exists, student enrolled in the
        course, no grade recorded yet for the pair.
        """
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        if not student_exists(store, student_id):
            return False, student_not_found(student_id)
        if not student_enrolled_in(store, student_id, course_id):
            return False, RecordError.not_found(
                f"Student with id {student_id} is not enrolled in course {course_id}"
            )

        existing = grade_exists(store, student_id, course_id)
        if existing:
            return False, duplicate_grade(existing)

        return VALID

    @staticmethod
    def validate_grade_update(
        store: RecordStore,
        grade_id: int,
        course_id: int,
        student_id: int
    ) -> ValidationResult:
        """
        Check an update of grade ``grade_id`` to a new (course, student) pair

        The course and student are checked before the grade itself, so a
        missing grade with a bad course id still reports the course.
        """
        if not course_exists(store, course_id):
            return False, course_not_found(course_id)
        if not student_exists(store, student_id):
            return False, student_not_found(student_id)
        if store.find_grade(grade_id) is None:
            return False, grade_not_found(grade_id)
        if not student_enrolled_in(store, student_id, course_id):
            return False, RecordError.not_found(
                f"Student with id {student_id} is not enrolled in course {course_id}"
            )

        existing = grade_exists(store, student_id, course_id, exclude_id=grade_id)
        if existing:
            return False, duplicate_grade(existing)

        return VALID

    @staticmethod
    def validate_grade_deletion(store: RecordStore, grade_id: int) -> ValidationResult:
        if store.find_grade(grade_id) is None:
            return False, grade_not_found(grade_id)
        return VALID


# ==================================================
# STORE AUDIT
# ==================================================

def find_integrity_violations(store: RecordStore) -> List[str]:
    """
    Audit the whole store for broken references

    Mutations keep the store consistent, but seed fixtures are loaded as-is.

    Returns:
        One human-readable line per violation, empty if the store is sound
    """
    violations = []

    for kind, records in ((COURSES, store.courses), (STUDENTS, store.students), (GRADES, store.grades)):
        counts = Counter(record.id for record in records)
        for record_id, count in sorted(counts.items()):
            if count > 1:
                violations.append(f"{kind}: id {record_id} is used {count} times")

    for student in store.students:
        if not course_exists(store, student.course_id):
            violations.append(
                f"students: student {student.id} references missing course {student.course_id}"
            )

    pairs = Counter()
    for grade in store.grades:
        pairs[(grade.student_id, grade.course_id)] += 1

        if not course_exists(store, grade.course_id):
            violations.append(
                f"grades: grade {grade.id} references missing course {grade.course_id}"
            )
        if not student_exists(store, grade.student_id):
            violations.append(
                f"grades: grade {grade.id} references missing student {grade.student_id}"
            )
        elif not student_enrolled_in(store, grade.student_id, grade.course_id):
            violations.append(
                f"grades: grade {grade.id} is for student {grade.student_id} "
                f"who is not enrolled in course {grade.course_id}"
            )

    for (student_id, course_id), count in sorted(pairs.items()):
        if count > 1:
            violations.append(
                f"grades: student {student_id} has {count} grades in course {course_id}"
            )

    return violations
