from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from studyhub.models.book import Book
from studyhub.models.concours import Concours
from studyhub.models.contestant import Contestant
from studyhub.models.course import Course
from studyhub.models.media import StorageReference
from studyhub.models.notification import Notification
from studyhub.models.question import Question
from studyhub.models.scholarship import Scholarship, ScholarshipImage
from studyhub.models.skill import Skill
from studyhub.models.solution import Solution
from studyhub.repositories.base import (
    BookRepository,
    ConcoursRepository,
    ContestantRepository,
    CourseRepository,
    NotificationRepository,
    QuestionRepository,
    ScholarshipRepository,
    SkillRepository,
    SolutionRepository,
)


def _now() -> datetime:
    return datetime.now(UTC)


def _ref_columns(prefix: str, ref: StorageReference | None) -> dict:
    return {
        f"{prefix}_id": ref.id if ref else None,
        f"{prefix}_url": ref.url if ref else None,
    }


def _ref(row: RowMapping, prefix: str) -> StorageReference | None:
    return StorageReference.from_columns(row[f"{prefix}_id"], row[f"{prefix}_url"])


class SQLAlchemyCourseRepository(CourseRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_course(row: RowMapping) -> Course:
        return Course(
            id=row["id"],
            uuid=row["uuid"],
            title=row["title"],
            code=row["code"],
            description=row["description"],
            level=row["level"],
            department=row["department"],
            instructor=row["instructor"],
            thumbnail=_ref(row, "thumbnail"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, course: Course) -> Course:
        course_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO courses (uuid, title, code, description, level, department, instructor, "
                "thumbnail_id, thumbnail_url, created_by, created_at, updated_at) "
                "VALUES (:uuid, :title, :code, :description, :level, :department, :instructor, "
                ":thumbnail_id, :thumbnail_url, :created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": course_uuid,
                "title": course.title,
                "code": course.code,
                "description": course.description,
                "level": course.level,
                "department": course.department,
                "instructor": course.instructor,
                **_ref_columns("thumbnail", course.thumbnail),
                "created_by": course.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve course after create (uuid={course_uuid})")
        return created

    def get_by_id(self, course_id: int) -> Course | None:
        row = self.conn.execute(text("SELECT * FROM courses WHERE id = :id"), {"id": course_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_course(row)

    def get_by_uuid(self, uuid: str) -> Course | None:
        row = (
            self.conn.execute(text("SELECT * FROM courses WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_course(row)

    def list_all(self, department: str | None = None, level: str | None = None) -> list[Course]:
        clauses = []
        params: dict = {}
        if department:
            clauses.append("department = :department")
            params["department"] = department
        if level:
            clauses.append("level = :level")
            params["level"] = level
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = (
            self.conn.execute(text(f"SELECT * FROM courses{where} ORDER BY created_at DESC, id DESC"), params)
            .mappings()
            .fetchall()
        )
        return [self._row_to_course(row) for row in rows]

    def update(self, course: Course) -> Course:
        self.conn.execute(
            text(
                "UPDATE courses SET title = :title, code = :code, description = :description, level = :level, "
                "department = :department, instructor = :instructor, thumbnail_id = :thumbnail_id, "
                "thumbnail_url = :thumbnail_url, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "id": course.id,
                "title": course.title,
                "code": course.code,
                "description": course.description,
                "level": course.level,
                "department": course.department,
                "instructor": course.instructor,
                **_ref_columns("thumbnail", course.thumbnail),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(course.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve course after update (id={course.id})")
        return updated

    def delete(self, course_id: int) -> None:
        self.conn.execute(text("DELETE FROM courses WHERE id = :id"), {"id": course_id})
        self.conn.commit()


class SQLAlchemyQuestionRepository(QuestionRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_question(row: RowMapping) -> Question:
        return Question(
            id=row["id"],
            uuid=row["uuid"],
            department=row["department"],
            level=row["level"],
            subject=row["subject"],
            year=row["year"],
            pdf=_ref(row, "pdf"),
            created_by=row["created_by"],
            created_at=row["created_at"],
        )

    def create(self, question: Question) -> Question:
        question_uuid = str(ULID())
        result = self.conn.execute(
            text(
                "INSERT INTO questions (uuid, department, level, subject, year, pdf_id, pdf_url, "
                "created_by, created_at) "
                "VALUES (:uuid, :department, :level, :subject, :year, :pdf_id, :pdf_url, :created_by, :created_at)"
            ),
            {
                "uuid": question_uuid,
                "department": question.department,
                "level": question.level,
                "subject": question.subject,
                "year": question.year,
                **_ref_columns("pdf", question.pdf),
                "created_by": question.created_by,
                "created_at": _now(),
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve question after create (uuid={question_uuid})")
        return created

    def get_by_id(self, question_id: int) -> Question | None:
        row = (
            self.conn.execute(text("SELECT * FROM questions WHERE id = :id"), {"id": question_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_question(row)

    def get_by_uuid(self, uuid: str) -> Question | None:
        row = (
            self.conn.execute(text("SELECT * FROM questions WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_question(row)

    def list_all(
        self,
        department: str | None = None,
        level: str | None = None,
        subject: str | None = None,
        year: str | None = None,
    ) -> list[Question]:
        filters = {"department": department, "level": level, "subject": subject, "year": year}
        params = {name: value for name, value in filters.items() if value}
        where = ""
        if params:
            where = " WHERE " + " AND ".join(f"{name} = :{name}" for name in params)
        rows = (
            self.conn.execute(text(f"SELECT * FROM questions{where} ORDER BY created_at DESC, id DESC"), params)
            .mappings()
            .fetchall()
        )
        return [self._row_to_question(row) for row in rows]

    def update(self, question: Question) -> Question:
        self.conn.execute(
            text(
                "UPDATE questions SET department = :department, level = :level, subject = :subject, "
                "year = :year, pdf_id = :pdf_id, pdf_url = :pdf_url WHERE id = :id"
            ),
            {
                "id": question.id,
                "department": question.department,
                "level": question.level,
                "subject": question.subject,
                "year": question.year,
                **_ref_columns("pdf", question.pdf),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(question.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve question after update (id={question.id})")
        return updated

    def delete(self, question_id: int) -> None:
        self.conn.execute(text("DELETE FROM questions WHERE id = :id"), {"id": question_id})
        self.conn.commit()


class SQLAlchemyBookRepository(BookRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_book(row: RowMapping) -> Book:
        return Book(
            id=row["id"],
            uuid=row["uuid"],
            title=row["title"],
            author=row["author"],
            description=row["description"],
            pdf=_ref(row, "pdf"),
            thumbnail=_ref(row, "thumbnail"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, book: Book) -> Book:
        book_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO books (uuid, title, author, description, pdf_id, pdf_url, thumbnail_id, "
                "thumbnail_url, created_by, created_at, updated_at) "
                "VALUES (:uuid, :title, :author, :description, :pdf_id, :pdf_url, :thumbnail_id, "
                ":thumbnail_url, :created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": book_uuid,
                "title": book.title,
                "author": book.author,
                "description": book.description,
                **_ref_columns("pdf", book.pdf),
                **_ref_columns("thumbnail", book.thumbnail),
                "created_by": book.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve book after create (uuid={book_uuid})")
        return created

    def get_by_id(self, book_id: int) -> Book | None:
        row = self.conn.execute(text("SELECT * FROM books WHERE id = :id"), {"id": book_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_book(row)

    def get_by_uuid(self, uuid: str) -> Book | None:
        row = self.conn.execute(text("SELECT * FROM books WHERE uuid = :uuid"), {"uuid": uuid}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_book(row)

    def list_all(self) -> list[Book]:
        rows = self.conn.execute(text("SELECT * FROM books ORDER BY created_at DESC, id DESC")).mappings().fetchall()
        return [self._row_to_book(row) for row in rows]

    def update(self, book: Book) -> Book:
        self.conn.execute(
            text(
                "UPDATE books SET title = :title, author = :author, description = :description, "
                "pdf_id = :pdf_id, pdf_url = :pdf_url, thumbnail_id = :thumbnail_id, "
                "thumbnail_url = :thumbnail_url, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "id": book.id,
                "title": book.title,
                "author": book.author,
                "description": book.description,
                **_ref_columns("pdf", book.pdf),
                **_ref_columns("thumbnail", book.thumbnail),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(book.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve book after update (id={book.id})")
        return updated

    def delete(self, book_id: int) -> None:
        self.conn.execute(text("DELETE FROM books WHERE id = :id"), {"id": book_id})
        self.conn.commit()


class SQLAlchemyNotificationRepository(NotificationRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_notification(row: RowMapping) -> Notification:
        return Notification(
            id=row["id"],
            uuid=row["uuid"],
            title=row["title"],
            description=row["description"],
            thumbnail=_ref(row, "thumbnail"),
            video=_ref(row, "video"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, notification: Notification) -> Notification:
        notification_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO notifications (uuid, title, description, thumbnail_id, thumbnail_url, "
                "video_id, video_url, created_by, created_at, updated_at) "
                "VALUES (:uuid, :title, :description, :thumbnail_id, :thumbnail_url, "
                ":video_id, :video_url, :created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": notification_uuid,
                "title": notification.title,
                "description": notification.description,
                **_ref_columns("thumbnail", notification.thumbnail),
                **_ref_columns("video", notification.video),
                "created_by": notification.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve notification after create (uuid={notification_uuid})")
        return created

    def get_by_id(self, notification_id: int) -> Notification | None:
        row = (
            self.conn.execute(text("SELECT * FROM notifications WHERE id = :id"), {"id": notification_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_notification(row)

    def get_by_uuid(self, uuid: str) -> Notification | None:
        row = (
            self.conn.execute(text("SELECT * FROM notifications WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_notification(row)

    def list_all(self) -> list[Notification]:
        rows = (
            self.conn.execute(text("SELECT * FROM notifications ORDER BY created_at DESC, id DESC"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_notification(row) for row in rows]

    def update(self, notification: Notification) -> Notification:
        self.conn.execute(
            text(
                "UPDATE notifications SET title = :title, description = :description, "
                "thumbnail_id = :thumbnail_id, thumbnail_url = :thumbnail_url, video_id = :video_id, "
                "video_url = :video_url, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "id": notification.id,
                "title": notification.title,
                "description": notification.description,
                **_ref_columns("thumbnail", notification.thumbnail),
                **_ref_columns("video", notification.video),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(notification.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve notification after update (id={notification.id})")
        return updated

    def delete(self, notification_id: int) -> None:
        self.conn.execute(text("DELETE FROM notifications WHERE id = :id"), {"id": notification_id})
        self.conn.commit()


class SQLAlchemyScholarshipRepository(ScholarshipRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _build_scholarship(row: RowMapping, image_rows: list[RowMapping]) -> Scholarship:
        return Scholarship(
            id=row["id"],
            uuid=row["uuid"],
            organization_name=row["organization_name"],
            description=row["description"],
            location=row["location"],
            website_link=row["website_link"],
            images=[
                ScholarshipImage(
                    id=image_row["id"],
                    scholarship_id=image_row["scholarship_id"],
                    storage_id=image_row["storage_id"],
                    url=image_row["url"],
                    sort_order=image_row["sort_order"],
                )
                for image_row in image_rows
            ],
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _row_to_scholarship(self, row: RowMapping) -> Scholarship:
        images = (
            self.conn.execute(
                text("SELECT * FROM scholarship_images WHERE scholarship_id = :sid ORDER BY sort_order, id"),
                {"sid": row["id"]},
            )
            .mappings()
            .fetchall()
        )
        return self._build_scholarship(row, list(images))

    def _insert_images(self, scholarship_id: int, images: list[ScholarshipImage], start: int) -> None:
        for offset, image in enumerate(images):
            self.conn.execute(
                text(
                    "INSERT INTO scholarship_images (scholarship_id, storage_id, url, sort_order) "
                    "VALUES (:scholarship_id, :storage_id, :url, :sort_order)"
                ),
                {
                    "scholarship_id": scholarship_id,
                    "storage_id": image.storage_id,
                    "url": image.url,
                    "sort_order": start + offset,
                },
            )

    def create(self, scholarship: Scholarship) -> Scholarship:
        scholarship_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO scholarships (uuid, organization_name, description, location, website_link, "
                "created_by, created_at, updated_at) "
                "VALUES (:uuid, :organization_name, :description, :location, :website_link, "
                ":created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": scholarship_uuid,
                "organization_name": scholarship.organization_name,
                "description": scholarship.description,
                "location": scholarship.location,
                "website_link": scholarship.website_link,
                "created_by": scholarship.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        scholarship_id = result.lastrowid
        self._insert_images(scholarship_id, scholarship.images, start=0)
        self.conn.commit()
        created = self.get_by_id(scholarship_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve scholarship after create (uuid={scholarship_uuid})")
        return created

    def get_by_id(self, scholarship_id: int) -> Scholarship | None:
        row = (
            self.conn.execute(text("SELECT * FROM scholarships WHERE id = :id"), {"id": scholarship_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_scholarship(row)

    def get_by_uuid(self, uuid: str) -> Scholarship | None:
        row = (
            self.conn.execute(text("SELECT * FROM scholarships WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_scholarship(row)

    def list_all(self) -> list[Scholarship]:
        rows = (
            self.conn.execute(text("SELECT * FROM scholarships ORDER BY created_at DESC, id DESC"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_scholarship(row) for row in rows]

    def update(self, scholarship: Scholarship) -> Scholarship:
        """Persist field changes and insert any images that have no id yet."""
        self.conn.execute(
            text(
                "UPDATE scholarships SET organization_name = :organization_name, description = :description, "
                "location = :location, website_link = :website_link, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "id": scholarship.id,
                "organization_name": scholarship.organization_name,
                "description": scholarship.description,
                "location": scholarship.location,
                "website_link": scholarship.website_link,
                "updated_at": _now(),
            },
        )
        existing = [image for image in scholarship.images if image.id is not None]
        new_images = [image for image in scholarship.images if image.id is None]
        start = max((image.sort_order for image in existing), default=-1) + 1
        self._insert_images(scholarship.id, new_images, start=start)
        self.conn.commit()
        updated = self.get_by_id(scholarship.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve scholarship after update (id={scholarship.id})")
        return updated

    def remove_image(self, image_id: int) -> None:
        self.conn.execute(text("DELETE FROM scholarship_images WHERE id = :id"), {"id": image_id})
        self.conn.commit()

    def delete(self, scholarship_id: int) -> None:
        self.conn.execute(
            text("DELETE FROM scholarship_images WHERE scholarship_id = :sid"),
            {"sid": scholarship_id},
        )
        self.conn.execute(text("DELETE FROM scholarships WHERE id = :id"), {"id": scholarship_id})
        self.conn.commit()


class SQLAlchemySkillRepository(SkillRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_skill(row: RowMapping) -> Skill:
        return Skill(
            id=row["id"],
            uuid=row["uuid"],
            name=row["name"],
            category=row["category"],
            description=row["description"],
            thumbnail=_ref(row, "thumbnail"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, skill: Skill) -> Skill:
        skill_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO skills (uuid, name, category, description, thumbnail_id, thumbnail_url, "
                "created_by, created_at, updated_at) "
                "VALUES (:uuid, :name, :category, :description, :thumbnail_id, :thumbnail_url, "
                ":created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": skill_uuid,
                "name": skill.name,
                "category": skill.category,
                "description": skill.description,
                **_ref_columns("thumbnail", skill.thumbnail),
                "created_by": skill.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve skill after create (uuid={skill_uuid})")
        return created

    def get_by_id(self, skill_id: int) -> Skill | None:
        row = self.conn.execute(text("SELECT * FROM skills WHERE id = :id"), {"id": skill_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_skill(row)

    def get_by_uuid(self, uuid: str) -> Skill | None:
        row = (
            self.conn.execute(text("SELECT * FROM skills WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_skill(row)

    def list_all(self, category: str | None = None) -> list[Skill]:
        where = " WHERE category = :category" if category else ""
        rows = (
            self.conn.execute(
                text(f"SELECT * FROM skills{where} ORDER BY created_at DESC, id DESC"), {"category": category}
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_skill(row) for row in rows]

    def update(self, skill: Skill) -> Skill:
        self.conn.execute(
            text(
                "UPDATE skills SET name = :name, category = :category, description = :description, "
                "thumbnail_id = :thumbnail_id, thumbnail_url = :thumbnail_url, updated_at = :updated_at "
                "WHERE id = :id"
            ),
            {
                "id": skill.id,
                "name": skill.name,
                "category": skill.category,
                "description": skill.description,
                **_ref_columns("thumbnail", skill.thumbnail),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(skill.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve skill after update (id={skill.id})")
        return updated

    def delete(self, skill_id: int) -> None:
        self.conn.execute(text("DELETE FROM skills WHERE id = :id"), {"id": skill_id})
        self.conn.commit()


class SQLAlchemyConcoursRepository(ConcoursRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_concours(row: RowMapping) -> Concours:
        return Concours(
            id=row["id"],
            uuid=row["uuid"],
            title=row["title"],
            description=row["description"],
            year=row["year"],
            department=row["department"],
            pdf=_ref(row, "pdf"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, concours: Concours) -> Concours:
        concours_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO concours (uuid, title, description, year, department, pdf_id, pdf_url, "
                "created_by, created_at, updated_at) "
                "VALUES (:uuid, :title, :description, :year, :department, :pdf_id, :pdf_url, "
                ":created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": concours_uuid,
                "title": concours.title,
                "description": concours.description,
                "year": concours.year,
                "department": concours.department,
                **_ref_columns("pdf", concours.pdf),
                "created_by": concours.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve concours after create (uuid={concours_uuid})")
        return created

    def get_by_id(self, concours_id: int) -> Concours | None:
        row = (
            self.conn.execute(text("SELECT * FROM concours WHERE id = :id"), {"id": concours_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_concours(row)

    def get_by_uuid(self, uuid: str) -> Concours | None:
        row = (
            self.conn.execute(text("SELECT * FROM concours WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_concours(row)

    def list_all(self, department: str | None = None, year: str | None = None) -> list[Concours]:
        filters = {"department": department, "year": year}
        params = {name: value for name, value in filters.items() if value}
        where = ""
        if params:
            where = " WHERE " + " AND ".join(f"{name} = :{name}" for name in params)
        rows = (
            self.conn.execute(
                text(f"SELECT * FROM concours{where} ORDER BY year DESC, created_at DESC, id DESC"), params
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_concours(row) for row in rows]

    def update(self, concours: Concours) -> Concours:
        self.conn.execute(
            text(
                "UPDATE concours SET title = :title, description = :description, year = :year, "
                "department = :department, pdf_id = :pdf_id, pdf_url = :pdf_url, updated_at = :updated_at "
                "WHERE id = :id"
            ),
            {
                "id": concours.id,
                "title": concours.title,
                "description": concours.description,
                "year": concours.year,
                "department": concours.department,
                **_ref_columns("pdf", concours.pdf),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(concours.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve concours after update (id={concours.id})")
        return updated

    def delete(self, concours_id: int) -> None:
        self.conn.execute(text("DELETE FROM concours WHERE id = :id"), {"id": concours_id})
        self.conn.commit()


class SQLAlchemySolutionRepository(SolutionRepository):
    SELECT = "SELECT s.*, q.uuid AS question_uuid FROM solutions s JOIN questions q ON q.id = s.question_id"

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_solution(row: RowMapping) -> Solution:
        return Solution(
            id=row["id"],
            uuid=row["uuid"],
            question_id=row["question_id"],
            question_uuid=row["question_uuid"],
            youtube_url=row["youtube_url"],
            pdf=_ref(row, "pdf"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, solution: Solution) -> Solution:
        solution_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO solutions (uuid, question_id, youtube_url, pdf_id, pdf_url, "
                "created_by, created_at, updated_at) "
                "VALUES (:uuid, :question_id, :youtube_url, :pdf_id, :pdf_url, "
                ":created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": solution_uuid,
                "question_id": solution.question_id,
                "youtube_url": solution.youtube_url,
                **_ref_columns("pdf", solution.pdf),
                "created_by": solution.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve solution after create (uuid={solution_uuid})")
        return created

    def get_by_id(self, solution_id: int) -> Solution | None:
        row = (
            self.conn.execute(text(f"{self.SELECT} WHERE s.id = :id"), {"id": solution_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_solution(row)

    def get_by_uuid(self, uuid: str) -> Solution | None:
        row = (
            self.conn.execute(text(f"{self.SELECT} WHERE s.uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_solution(row)

    def list_all(self, question_id: int | None = None) -> list[Solution]:
        where = " WHERE s.question_id = :question_id" if question_id is not None else ""
        rows = (
            self.conn.execute(
                text(f"{self.SELECT}{where} ORDER BY s.created_at DESC, s.id DESC"), {"question_id": question_id}
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_solution(row) for row in rows]

    def update(self, solution: Solution) -> Solution:
        self.conn.execute(
            text(
                "UPDATE solutions SET youtube_url = :youtube_url, pdf_id = :pdf_id, pdf_url = :pdf_url, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {
                "id": solution.id,
                "youtube_url": solution.youtube_url,
                **_ref_columns("pdf", solution.pdf),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(solution.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve solution after update (id={solution.id})")
        return updated

    def delete(self, solution_id: int) -> None:
        self.conn.execute(text("DELETE FROM solutions WHERE id = :id"), {"id": solution_id})
        self.conn.commit()


class SQLAlchemyContestantRepository(ContestantRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_contestant(row: RowMapping) -> Contestant:
        return Contestant(
            id=row["id"],
            uuid=row["uuid"],
            contest=row["contest"],
            name=row["name"],
            bio=row["bio"],
            image=_ref(row, "image"),
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, contestant: Contestant) -> Contestant:
        contestant_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO contestants (uuid, contest, name, bio, image_id, image_url, "
                "created_by, created_at, updated_at) "
                "VALUES (:uuid, :contest, :name, :bio, :image_id, :image_url, "
                ":created_by, :created_at, :updated_at)"
            ),
            {
                "uuid": contestant_uuid,
                "contest": contestant.contest,
                "name": contestant.name,
                "bio": contestant.bio,
                **_ref_columns("image", contestant.image),
                "created_by": contestant.created_by,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        created = self.get_by_id(result.lastrowid)
        if created is None:
            raise RuntimeError(f"Failed to retrieve contestant after create (uuid={contestant_uuid})")
        return created

    def get_by_id(self, contestant_id: int) -> Contestant | None:
        row = (
            self.conn.execute(text("SELECT * FROM contestants WHERE id = :id"), {"id": contestant_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_contestant(row)

    def get_by_uuid(self, uuid: str) -> Contestant | None:
        row = (
            self.conn.execute(text("SELECT * FROM contestants WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_contestant(row)

    def list_all(self, contest: str | None = None) -> list[Contestant]:
        where = " WHERE contest = :contest" if contest else ""
        rows = (
            self.conn.execute(
                text(f"SELECT * FROM contestants{where} ORDER BY created_at DESC, id DESC"), {"contest": contest}
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_contestant(row) for row in rows]

    def update(self, contestant: Contestant) -> Contestant:
        self.conn.execute(
            text(
                "UPDATE contestants SET name = :name, bio = :bio, image_id = :image_id, image_url = :image_url, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {
                "id": contestant.id,
                "name": contestant.name,
                "bio": contestant.bio,
                **_ref_columns("image", contestant.image),
                "updated_at": _now(),
            },
        )
        self.conn.commit()
        updated = self.get_by_id(contestant.id)
        if updated is None:
            raise RuntimeError(f"Failed to retrieve contestant after update (id={contestant.id})")
        return updated

    def delete(self, contestant_id: int) -> None:
        self.conn.execute(text("DELETE FROM contestants WHERE id = :id"), {"id": contestant_id})
        self.conn.commit()
