from study_planner.extensions import db


class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.Integer, primary_key=True)
    # Plain reference: a task may point at a subject id that does not exist
    subject_id = db.Column(db.Integer, nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    completed = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "description": self.description,
            "completed": bool(self.completed),
        }
