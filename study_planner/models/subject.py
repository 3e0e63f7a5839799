from study_planner.extensions import db
from study_planner.utils.time_utils import format_timestamp


class Subject(db.Model):
    __tablename__ = "subjects"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    exam_date = db.Column(db.DateTime, nullable=False)
    completed = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "examDate": format_timestamp(self.exam_date),
            "completed": bool(self.completed),
        }

    def __repr__(self):
        return f"<Subject {self.name}>"
