# study_planner/services/storage_service.py
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from study_planner.models.user import User
from study_planner.models.subject import Subject
from study_planner.models.task import Task
from study_planner.models.study_log import StudyLog

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    pass


class DuplicateUsernameError(ValueError):
    pass


def get_storage():
    """The Storage instance registered on the current app."""
    return current_app.extensions["storage"]


class Storage:
    """
    Bookkeeping for users, subjects, tasks and study logs.

    Built once by the app factory around a SQLAlchemy session and handed to
    request handlers through ``get_storage()``. Every mutating call commits
    its own transaction; a failed commit is rolled back before re-raising.
    """

    def __init__(self, session):
        self.session = session

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    @staticmethod
    def _merge(record, fields):
        for key, value in fields.items():
            setattr(record, key, value)

    # =========================================================
    # USERS
    # =========================================================

    def get_user(self, user_id):
        return self.session.get(User, user_id)

    def get_user_by_username(self, username):
        return self.session.query(User).filter_by(username=username).first()

    def create_user(self, username, password, grade=None):
        if self.get_user_by_username(username):
            raise DuplicateUsernameError("Username already exists")

        user = User(username=username, grade=grade or None, total_study_hours=0)
        user.set_password(password)

        self.session.add(user)
        self._commit()
        return user

    def update_user(self, user_id, fields):
        user = self.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        self._merge(user, fields)
        self._commit()
        return user

    # =========================================================
    # SUBJECTS
    # =========================================================

    def get_subject(self, subject_id):
        return self.session.get(Subject, subject_id)

    def get_subjects_for_user(self, user_id):
        return (
            self.session.query(Subject)
            .filter_by(user_id=user_id)
            .order_by(Subject.id)
            .all()
        )

    def create_subject(self, user_id, name, exam_date):
        subject = Subject(
            user_id=user_id,
            name=name,
            exam_date=exam_date,
            completed=False
        )
        self.session.add(subject)
        self._commit()
        return subject

    def update_subject(self, subject_id, fields):
        subject = self.get_subject(subject_id)
        if not subject:
            raise NotFoundError("Subject not found")

        self._merge(subject, fields)
        self._commit()
        return subject

    # =========================================================
    # TASKS
    # =========================================================

    def get_task(self, task_id):
        return self.session.get(Task, task_id)

    def get_tasks_for_subject(self, subject_id):
        return (
            self.session.query(Task)
            .filter_by(subject_id=subject_id)
            .order_by(Task.id)
            .all()
        )

    def create_task(self, subject_id, description):
        task = Task(subject_id=subject_id, description=description, completed=False)
        self.session.add(task)
        self._commit()
        return task

    def create_tasks(self, subject_id, descriptions):
        """
        Inserts one task per description in a single transaction.
        Either every task is committed or none is.
        """
        tasks = [
            Task(subject_id=subject_id, description=description, completed=False)
            for description in descriptions
        ]
        self.session.add_all(tasks)
        self._commit()

        logger.info("Created %d task(s) for subject %s", len(tasks), subject_id)
        return tasks

    def update_task(self, task_id, fields):
        task = self.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        self._merge(task, fields)
        self._commit()
        return task

    # =========================================================
    # STUDY LOGS
    # =========================================================

    def create_study_log(self, user_id, subject_id, duration, date):
        log = StudyLog(
            user_id=user_id,
            subject_id=subject_id,
            duration=duration,
            date=date
        )
        self.session.add(log)
        self._commit()
        return log

    def get_study_logs_for_user(self, user_id):
        return (
            self.session.query(StudyLog)
            .filter_by(user_id=user_id)
            .order_by(StudyLog.date, StudyLog.id)
            .all()
        )
