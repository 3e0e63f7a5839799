from .user import User
from .subject import Subject
from .task import Task
from .study_log import StudyLog
