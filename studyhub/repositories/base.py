from abc import ABC, abstractmethod

from studyhub.models.book import Book
from studyhub.models.concours import Concours
from studyhub.models.contestant import Contestant
from studyhub.models.course import Course
from studyhub.models.notification import Notification
from studyhub.models.question import Question
from studyhub.models.scholarship import Scholarship
from studyhub.models.skill import Skill
from studyhub.models.solution import Solution


class CourseRepository(ABC):
    @abstractmethod
    def create(self, course: Course) -> Course: ...

    @abstractmethod
    def get_by_id(self, course_id: int) -> Course | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Course | None: ...

    @abstractmethod
    def list_all(self, department: str | None = None, level: str | None = None) -> list[Course]: ...

    @abstractmethod
    def update(self, course: Course) -> Course: ...

    @abstractmethod
    def delete(self, course_id: int) -> None: ...


class QuestionRepository(ABC):
    @abstractmethod
    def create(self, question: Question) -> Question: ...

    @abstractmethod
    def get_by_id(self, question_id: int) -> Question | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Question | None: ...

    @abstractmethod
    def list_all(
        self,
        department: str | None = None,
        level: str | None = None,
        subject: str | None = None,
        year: str | None = None,
    ) -> list[Question]: ...

    @abstractmethod
    def update(self, question: Question) -> Question: ...

    @abstractmethod
    def delete(self, question_id: int) -> None: ...


class BookRepository(ABC):
    @abstractmethod
    def create(self, book: Book) -> Book: ...

    @abstractmethod
    def get_by_id(self, book_id: int) -> Book | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Book | None: ...

    @abstractmethod
    def list_all(self) -> list[Book]: ...

    @abstractmethod
    def update(self, book: Book) -> Book: ...

    @abstractmethod
    def delete(self, book_id: int) -> None: ...


class NotificationRepository(ABC):
    @abstractmethod
    def create(self, notification: Notification) -> Notification: ...

    @abstractmethod
    def get_by_id(self, notification_id: int) -> Notification | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Notification | None: ...

    @abstractmethod
    def list_all(self) -> list[Notification]: ...

    @abstractmethod
    def update(self, notification: Notification) -> Notification: ...

    @abstractmethod
    def delete(self, notification_id: int) -> None: ...


class ScholarshipRepository(ABC):
    @abstractmethod
    def create(self, scholarship: Scholarship) -> Scholarship: ...

    @abstractmethod
    def get_by_id(self, scholarship_id: int) -> Scholarship | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Scholarship | None: ...

    @abstractmethod
    def list_all(self) -> list[Scholarship]: ...

    @abstractmethod
    def update(self, scholarship: Scholarship) -> Scholarship: ...

    @abstractmethod
    def remove_image(self, image_id: int) -> None: ...

    @abstractmethod
    def delete(self, scholarship_id: int) -> None: ...


class SkillRepository(ABC):
    @abstractmethod
    def create(self, skill: Skill) -> Skill: ...

    @abstractmethod
    def get_by_id(self, skill_id: int) -> Skill | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Skill | None: ...

    @abstractmethod
    def list_all(self, category: str | None = None) -> list[Skill]: ...

    @abstractmethod
    def update(self, skill: Skill) -> Skill: ...

    @abstractmethod
    def delete(self, skill_id: int) -> None: ...


class ConcoursRepository(ABC):
    @abstractmethod
    def create(self, concours: Concours) -> Concours: ...

    @abstractmethod
    def get_by_id(self, concours_id: int) -> Concours | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Concours | None: ...

    @abstractmethod
    def list_all(self, department: str | None = None, year: str | None = None) -> list[Concours]: ...

    @abstractmethod
    def update(self, concours: Concours) -> Concours: ...

    @abstractmethod
    def delete(self, concours_id: int) -> None: ...


class SolutionRepository(ABC):
    @abstractmethod
    def create(self, solution: Solution) -> Solution: ...

    @abstractmethod
    def get_by_id(self, solution_id: int) -> Solution | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Solution | None: ...

    @abstractmethod
    def list_all(self, question_id: int | None = None) -> list[Solution]: ...

    @abstractmethod
    def update(self, solution: Solution) -> Solution: ...

    @abstractmethod
    def delete(self, solution_id: int) -> None: ...


class ContestantRepository(ABC):
    @abstractmethod
    def create(self, contestant: Contestant) -> Contestant: ...

    @abstractmethod
    def get_by_id(self, contestant_id: int) -> Contestant | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Contestant | None: ...

    @abstractmethod
    def list_all(self, contest: str | None = None) -> list[Contestant]: ...

    @abstractmethod
    def update(self, contestant: Contestant) -> Contestant: ...

    @abstractmethod
    def delete(self, contestant_id: int) -> None: ...
