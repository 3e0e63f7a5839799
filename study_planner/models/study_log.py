from study_planner.extensions import db
from study_planner.utils.time_utils import format_timestamp


class StudyLog(db.Model):
    __tablename__ = "study_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    subject_id = db.Column(db.Integer, nullable=False, index=True)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    date = db.Column(db.DateTime, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "subjectId": self.subject_id,
            "duration": self.duration,
            "date": format_timestamp(self.date),
        }
