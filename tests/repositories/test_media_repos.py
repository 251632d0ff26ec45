from studyhub.models.book import Book
from studyhub.models.course import Course
from studyhub.models.media import StorageReference
from studyhub.models.notification import Notification
from studyhub.models.question import Question


def _ref(name: str) -> StorageReference:
    return StorageReference(id=f"media/{name}", url=f"http://localhost:8000/uploads/media/{name}")


class TestCourseRepo:
    def test_create_and_get(self, course_repo):
        created = course_repo.create(Course(title="Algorithms", department="CS", thumbnail=_ref("a.png"), created_by=1))

        assert created.id is not None
        assert len(created.uuid) == 26
        assert created.thumbnail == _ref("a.png")
        assert created.created_at is not None
        assert course_repo.get_by_uuid(created.uuid) == created

    def test_null_thumbnail_round_trips_as_none(self, course_repo):
        created = course_repo.create(Course(title="Algorithms", department="CS", created_by=1))
        assert created.thumbnail is None

    def test_get_not_found(self, course_repo):
        assert course_repo.get_by_id(9999) is None
        assert course_repo.get_by_uuid("missing") is None

    def test_list_newest_first(self, course_repo):
        first = course_repo.create(Course(title="A", department="CS", created_by=1))
        second = course_repo.create(Course(title="B", department="CS", created_by=1))
        assert [c.id for c in course_repo.list_all()] == [second.id, first.id]

    def test_update_clears_thumbnail(self, course_repo):
        created = course_repo.create(Course(title="A", department="CS", thumbnail=_ref("a.png"), created_by=1))
        updated = course_repo.update(created.model_copy(update={"thumbnail": None, "title": "B"}))

        assert updated.thumbnail is None
        assert updated.title == "B"

    def test_delete(self, course_repo):
        created = course_repo.create(Course(title="A", department="CS", created_by=1))
        course_repo.delete(created.id)
        assert course_repo.get_by_id(created.id) is None


class TestQuestionRepo:
    def test_create_and_filter(self, question_repo):
        question_repo.create(
            Question(department="CS", level="100", subject="Maths", year="2024", pdf=_ref("q1.pdf"), created_by=1)
        )
        question_repo.create(
            Question(department="EE", level="100", subject="Physics", year="2023", pdf=_ref("q2.pdf"), created_by=1)
        )

        assert len(question_repo.list_all()) == 2
        assert [q.subject for q in question_repo.list_all(department="EE")] == ["Physics"]
        assert [q.pdf for q in question_repo.list_all(year="2024")] == [_ref("q1.pdf")]

    def test_update_pdf(self, question_repo):
        created = question_repo.create(
            Question(department="CS", level="100", subject="Maths", year="2024", pdf=_ref("q1.pdf"), created_by=1)
        )
        updated = question_repo.update(created.model_copy(update={"pdf": _ref("q2.pdf")}))
        assert updated.pdf == _ref("q2.pdf")


class TestBookRepo:
    def test_create_with_both_files(self, book_repo):
        created = book_repo.create(
            Book(title="SICP", pdf=_ref("b.pdf"), thumbnail=_ref("b.png"), created_by=1)
        )
        assert created.pdf == _ref("b.pdf")
        assert created.thumbnail == _ref("b.png")
        assert book_repo.list_all() == [created]

    def test_delete(self, book_repo):
        created = book_repo.create(Book(title="SICP", pdf=_ref("b.pdf"), created_by=1))
        book_repo.delete(created.id)
        assert book_repo.list_all() == []


class TestNotificationRepo:
    def test_thumbnail_notification(self, notification_repo):
        created = notification_repo.create(
            Notification(title="Exams", description="Soon", thumbnail=_ref("n.png"), created_by=1)
        )
        assert created.thumbnail == _ref("n.png")
        assert created.video is None

    def test_switch_to_video(self, notification_repo):
        created = notification_repo.create(
            Notification(title="Exams", description="Soon", thumbnail=_ref("n.png"), created_by=1)
        )
        updated = notification_repo.update(
            created.model_copy(update={"thumbnail": None, "video": _ref("n.mp4")})
        )
        assert updated.thumbnail is None
        assert updated.video == _ref("n.mp4")
