"""
In-memory record store for courses, students and grades
Loaded from JSON seed fixtures, reset on every process restart
"""
import json
import logging
import os
import threading
from typing import Callable, Dict, Iterable, List, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .models import Course, Student, Grade

logger = logging.getLogger(__name__)

COURSES = 'courses'
STUDENTS = 'students'
GRADES = 'grades'

RECORD_CLASSES = {
    COURSES: Course,
    STUDENTS: Student,
    GRADES: Grade,
}


class RecordStore:
    """
    Owns the three record collections and their id counters.

    Each collection keeps insertion order. Ids come from a per-collection
    counter that starts after the highest seeded id and only moves forward,
    so an id is never handed out twice even after deletions.

    Mutations must hold ``lock`` across their validate-then-mutate step.
    """

    def __init__(
        self,
        courses: Iterable[Course] = (),
        students: Iterable[Student] = (),
        grades: Iterable[Grade] = (),
    ):
        self.lock = threading.RLock()
        self._collections: Dict[str, list] = {
            COURSES: list(courses),
            STUDENTS: list(students),
            GRADES: list(grades),
        }
        self._next_ids: Dict[str, int] = {
            kind: max((record.id for record in records), default=0) + 1
            for kind, records in self._collections.items()
        }

    # ==================================================
    # LOADING
    # ==================================================

    @classmethod
    def from_fixtures(cls, directory: str) -> "RecordStore":
        """
        Build a store from ``courses.json``, ``students.json`` and ``grades.json``

        Each file holds a JSON list of camelCase records. A missing file
        yields an empty collection.

        Raises:
            ImproperlyConfigured: If a fixture file cannot be parsed
        """
        loaded = {}
        for kind, record_class in RECORD_CLASSES.items():
            path = os.path.join(directory, f"{kind}.json")
            if not os.path.exists(path):
                logger.warning("Fixture %s not found, starting with no %s", path, kind)
                loaded[kind] = []
                continue

            try:
                with open(path, encoding='utf-8') as f:
                    raw = json.load(f)
                loaded[kind] = [record_class.from_dict(item) for item in raw]
            except (OSError, ValueError, KeyError, TypeError) as e:
                raise ImproperlyConfigured(f"Invalid fixture file {path}: {e}") from e

        store = cls(
            courses=loaded[COURSES],
            students=loaded[STUDENTS],
            grades=loaded[GRADES],
        )
        logger.info(
            "Loaded %d courses, %d students, %d grades from %s",
            len(loaded[COURSES]), len(loaded[STUDENTS]), len(loaded[GRADES]), directory
        )
        return store

    # ==================================================
    # COLLECTION ACCESS
    # ==================================================

    @property
    def courses(self) -> List[Course]:
        return list(self._collections[COURSES])

    @property
    def students(self) -> List[Student]:
        return list(self._collections[STUDENTS])

    @property
    def grades(self) -> List[Grade]:
        return list(self._collections[GRADES])

    def find(self, kind: str, predicate: Callable) -> Optional[object]:
        """Return the first record of ``kind`` matching ``predicate``, or None"""
        for record in self._collections[kind]:
            if predicate(record):
                return record
        return None

    def filter(self, kind: str, predicate: Callable) -> list:
        return [record for record in self._collections[kind] if predicate(record)]

    def find_course(self, course_id: int) -> Optional[Course]:
        return self.find(COURSES, lambda course: course.id == course_id)

    def find_student(self, student_id: int) -> Optional[Student]:
        return self.find(STUDENTS, lambda student: student.id == student_id)

    def find_grade(self, grade_id: int) -> Optional[Grade]:
        return self.find(GRADES, lambda grade: grade.id == grade_id)

    # ==================================================
    # MUTATION
    # ==================================================

    def next_id(self, kind: str) -> int:
        """Reserve and return the next id for ``kind``"""
        with self.lock:
            next_id = self._next_ids[kind]
            self._next_ids[kind] = next_id + 1
            return next_id

    def append(self, kind: str, record) -> None:
        with self.lock:
            self._collections[kind].append(record)
            # Keep the counter ahead of ids supplied by the caller
            if record.id >= self._next_ids[kind]:
                self._next_ids[kind] = record.id + 1

    def remove_where(self, kind: str, predicate: Callable) -> list:
        """Remove every record of ``kind`` matching ``predicate`` and return them"""
        with self.lock:
            records = self._collections[kind]
            removed = [record for record in records if predicate(record)]
            if removed:
                self._collections[kind] = [record for record in records if not predicate(record)]
            return removed

    def add_course(self, name: str, description: str) -> Course:
        with self.lock:
            course = Course(id=self.next_id(COURSES), name=name, description=description)
            self.append(COURSES, course)
            return course

    def add_student(self, first_name: str, last_name: str, course_id: int) -> Student:
        with self.lock:
            student = Student(
                id=self.next_id(STUDENTS),
                first_name=first_name,
                last_name=last_name,
                course_id=course_id,
            )
            self.append(STUDENTS, student)
            return student

    def add_grade(self, course_id: int, student_id: int, grade: int) -> Grade:
        with self.lock:
            record = Grade(
                id=self.next_id(GRADES),
                course_id=course_id,
                student_id=student_id,
                grade=grade,
            )
            self.append(GRADES, record)
            return record

    def __repr__(self) -> str:
        return (
            f"RecordStore(courses={len(self._collections[COURSES])}, "
            f"students={len(self._collections[STUDENTS])}, "
            f"grades={len(self._collections[GRADES])})"
        )


# ==================================================
# PROCESS-WIDE STORE
# ==================================================

_default_store: Optional[RecordStore] = None
_default_store_lock = threading.Lock()


def get_default_store() -> RecordStore:
    """Return the store served by the HTTP endpoint, loading it on first use"""
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            _default_store = RecordStore.from_fixtures(settings.RECORDS_FIXTURES_DIR)
        return _default_store


def reset_default_store() -> None:
    """Drop the process-wide store so the next request reloads the seed fixtures"""
    global _default_store
    with _default_store_lock:
        _default_store = None
