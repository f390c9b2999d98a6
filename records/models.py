"""
Record types for the coursebook registry
Plain in-memory records linked by integer ids
"""
from dataclasses import dataclass, asdict
from typing import Dict


@dataclass
class Course:
    """A course students can be enrolled in"""
    id: int
    name: str
    description: str

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Course":
        return cls(
            id=int(data['id']),
            name=data['name'],
            description=data['description'],
        )


@dataclass
class Student:
    """A student enrolled in exactly one course"""
    id: int
    first_name: str
    last_name: str
    course_id: int

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'courseId': self.course_id,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Student":
        return cls(
            id=int(data['id']),
            first_name=data['firstName'],
            last_name=data['lastName'],
            course_id=int(data['courseId']),
        )


@dataclass
class Grade:
    """
    Grade awarded to a student for the course they are enrolled in
    At most one grade exists per (student, course) pair
    """
    id: int
    course_id: int
    student_id: int
    grade: int

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'courseId': self.course_id,
            'studentId': self.student_id,
            'grade': self.grade,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Grade":
        return cls(
            id=int(data['id']),
            course_id=int(data['courseId']),
            student_id=int(data['studentId']),
            grade=int(data['grade']),
        )
