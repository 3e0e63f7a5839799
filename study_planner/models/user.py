from study_planner.extensions import db
from werkzeug.security import generate_password_hash, check_password_hash


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    grade = db.Column(db.String(20), nullable=True)
    total_study_hours = db.Column(db.Integer, nullable=False, default=0)

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        return check_password_hash(self.password, raw_password)

    def to_dict(self):
        # password is never serialised
        return {
            "id": self.id,
            "username": self.username,
            "grade": self.grade,
            "totalStudyHours": self.total_study_hours or 0,
        }
