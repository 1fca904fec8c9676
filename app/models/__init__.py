# Database models

from app.models.school import School
from app.models.user import User
from app.models.school_class import SchoolClass
from app.models.subject import Subject
from app.models.teacher import Teacher
from app.models.student import Student
from app.models.settings import Settings
from app.models.teacher_class import TeacherClass
from app.models.record_book import RecordBook
from app.models.transfer import StudentEnrollment, StudentTransfer, TransferType
from app.models.timetable import TimetableConfig, TimetableSlot, TimetableVersion

__all__ = [
    "School",
    "User",
    "SchoolClass",
    "Subject",
    "Teacher",
    "Student",
    "Settings",
    "TeacherClass",
    "RecordBook",
    "StudentEnrollment",
    "StudentTransfer",
    "TransferType",
    "TimetableConfig",
    "TimetableSlot",
    "TimetableVersion",
]
