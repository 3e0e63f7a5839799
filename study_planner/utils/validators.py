# study_planner/utils/validators.py
"""
Request payload parsing.

Each parser takes the decoded JSON body and returns a dict keyed by model
attribute names, or raises ValidationError. Create parsers ignore keys they
do not know about; update parsers reject them, so ids and owner references
can never be rewritten through a PATCH.
"""
from study_planner.utils.time_utils import parse_timestamp


class ValidationError(ValueError):
    pass


# =========================================================
# FIELD HELPERS
# =========================================================

def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _text(data, key, required=True, strip=True):
    value = data.get(key)
    if value is None:
        if required:
            raise ValidationError(f"{key} is required")
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} must be a non-empty string")
    return value.strip() if strip else value


def _integer(data, key):
    value = data.get(key)
    if value is None:
        raise ValidationError(f"{key} is required")
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key} must be an integer")
    return value


def _boolean(data, key):
    value = data.get(key)
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a boolean")
    return value


def _timestamp(data, key):
    value = data.get(key)
    if value is None:
        raise ValidationError(f"{key} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be an ISO-8601 timestamp")
    try:
        return parse_timestamp(value)
    except ValueError:
        raise ValidationError(f"{key} must be an ISO-8601 timestamp")


def _reject_unknown(data, allowed):
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValidationError(f"Unsupported field(s): {', '.join(unknown)}")
    if not data:
        raise ValidationError("No fields to update")


# =========================================================
# USERS
# =========================================================

def parse_registration(data):
    data = _require_object(data)
    grade = data.get("grade")
    if grade is not None and not isinstance(grade, str):
        raise ValidationError("grade must be a string")
    if grade is not None:
        grade = grade.strip() or None

    return {
        "username": _text(data, "username"),
        "password": _text(data, "password", strip=False),
        "grade": grade,
    }


def parse_login(data):
    data = _require_object(data)
    return {
        "username": _text(data, "username"),
        "password": _text(data, "password", strip=False),
    }


def parse_user_update(data):
    data = _require_object(data)
    _reject_unknown(data, {"grade"})
    return {"grade": _text(data, "grade", required=False)}


# =========================================================
# SUBJECTS
# =========================================================

def parse_subject_create(data):
    data = _require_object(data)
    return {
        "name": _text(data, "name"),
        "exam_date": _timestamp(data, "examDate"),
    }


def parse_subject_update(data):
    data = _require_object(data)
    _reject_unknown(data, {"name", "examDate", "completed"})

    fields = {}
    if "name" in data:
        fields["name"] = _text(data, "name")
    if "examDate" in data:
        fields["exam_date"] = _timestamp(data, "examDate")
    if "completed" in data:
        fields["completed"] = _boolean(data, "completed")
    return fields


# =========================================================
# TASKS
# =========================================================

def parse_task_create(data):
    data = _require_object(data)
    return {
        "description": _text(data, "description"),
        "subject_id": _integer(data, "subjectId"),
    }


def parse_task_update(data):
    data = _require_object(data)
    _reject_unknown(data, {"description", "completed"})

    fields = {}
    if "description" in data:
        fields["description"] = _text(data, "description")
    if "completed" in data:
        fields["completed"] = _boolean(data, "completed")
    return fields


# =========================================================
# STUDY LOGS / CHAT
# =========================================================

def parse_study_log_create(data):
    data = _require_object(data)
    duration = _integer(data, "duration")
    if duration < 0:
        raise ValidationError("duration must not be negative")

    return {
        "subject_id": _integer(data, "subjectId"),
        "duration": duration,
        "date": _timestamp(data, "date"),
    }


def parse_chat_message(data):
    data = _require_object(data)
    message = data.get("message")
    if not isinstance(message, str) or not message:
        raise ValidationError("message must be a non-empty string")
    return message
