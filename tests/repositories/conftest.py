import pytest
from sqlalchemy import Connection

from studyhub.repositories.sqlalchemy import (
    SQLAlchemyBookRepository,
    SQLAlchemyConcoursRepository,
    SQLAlchemyContestantRepository,
    SQLAlchemyCourseRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyQuestionRepository,
    SQLAlchemyScholarshipRepository,
    SQLAlchemySkillRepository,
    SQLAlchemySolutionRepository,
)


@pytest.fixture()
def course_repo(db_connection: Connection) -> SQLAlchemyCourseRepository:
    return SQLAlchemyCourseRepository(db_connection)


@pytest.fixture()
def question_repo(db_connection: Connection) -> SQLAlchemyQuestionRepository:
    return SQLAlchemyQuestionRepository(db_connection)


@pytest.fixture()
def book_repo(db_connection: Connection) -> SQLAlchemyBookRepository:
    return SQLAlchemyBookRepository(db_connection)


@pytest.fixture()
def notification_repo(db_connection: Connection) -> SQLAlchemyNotificationRepository:
    return SQLAlchemyNotificationRepository(db_connection)


@pytest.fixture()
def scholarship_repo(db_connection: Connection) -> SQLAlchemyScholarshipRepository:
    return SQLAlchemyScholarshipRepository(db_connection)


@pytest.fixture()
def skill_repo(db_connection: Connection) -> SQLAlchemySkillRepository:
    return SQLAlchemySkillRepository(db_connection)


@pytest.fixture()
def concours_repo(db_connection: Connection) -> SQLAlchemyConcoursRepository:
    return SQLAlchemyConcoursRepository(db_connection)


@pytest.fixture()
def solution_repo(db_connection: Connection) -> SQLAlchemySolutionRepository:
    return SQLAlchemySolutionRepository(db_connection)


@pytest.fixture()
def contestant_repo(db_connection: Connection) -> SQLAlchemyContestantRepository:
    return SQLAlchemyContestantRepository(db_connection)
