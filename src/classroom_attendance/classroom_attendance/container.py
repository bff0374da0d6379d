from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.access import ClassAccess
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import EnrollmentService
from .lectures.mysql_lecture_repository import MySQLLectureRepository
from .lectures.repository import LectureRepository
from .lectures.service import LectureService
from .stats.mysql_stats_repository import MySQLStatsRepository
from .stats.repository import StatsRepository
from .stats.service import StatsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    classes_repo: ClassRepository
    enrollments_repo: EnrollmentRepository
    lectures_repo: LectureRepository
    attendance_repo: AttendanceRepository
    stats_repo: StatsRepository

    auth_service: AuthService
    user_service: UserService
    class_service: ClassService
    enrollment_service: EnrollmentService
    lecture_service: LectureService
    attendance_service: AttendanceService
    stats_service: StatsService


def wire_container(
    *,
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    enrollments_repo: EnrollmentRepository,
    lectures_repo: LectureRepository,
    attendance_repo: AttendanceRepository,
    stats_repo: StatsRepository,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build the services on top of any set of repositories (MySQL or in-memory)."""

    access = ClassAccess(classes_repo, enrollments_repo)
    lecture_service = LectureService(lectures_repo, access)
    attendance_service = AttendanceService(attendance_repo, lecture_service, enrollments_repo, access, clock=clock)

    return Container(
        users_repo=users_repo,
        classes_repo=classes_repo,
        enrollments_repo=enrollments_repo,
        lectures_repo=lectures_repo,
        attendance_repo=attendance_repo,
        stats_repo=stats_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        class_service=ClassService(classes_repo, access, clock=clock),
        enrollment_service=EnrollmentService(enrollments_repo, classes_repo, access, clock=clock),
        lecture_service=lecture_service,
        attendance_service=attendance_service,
        stats_service=StatsService(stats_repo, attendance_service, access),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        lectures_repo=MySQLLectureRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        stats_repo=MySQLStatsRepository(conn),
    )
