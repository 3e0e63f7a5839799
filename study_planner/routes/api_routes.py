# study_planner/routes/api_routes.py
from flask import Blueprint, Response, current_app, g, jsonify, request

from study_planner.services.chapter_service import (
    CompletionError,
    EmptyChapterListError,
    GradeNotSetError,
    chat_reply,
    fetch_chapters_for_subject,
    get_completion_client,
)
from study_planner.services.progress_service import get_progress_summary, get_study_logs_as_csv
from study_planner.services.storage_service import NotFoundError, get_storage
from study_planner.utils.decorators import login_required
from study_planner.utils.validators import (
    ValidationError,
    parse_chat_message,
    parse_study_log_create,
    parse_subject_create,
    parse_subject_update,
    parse_task_create,
    parse_task_update,
)

api_bp = Blueprint("api", __name__)


def _payload():
    return request.get_json(silent=True)


# =========================================================
# SUBJECTS
# =========================================================

@api_bp.route("/subjects", methods=["GET"])
@login_required
def list_subjects():
    try:
        subjects = get_storage().get_subjects_for_user(g.user.id)
    except Exception:
        current_app.logger.exception("Failed to list subjects for user %s", g.user.id)
        return jsonify({"error": "Failed to fetch subjects"}), 500

    return jsonify([s.to_dict() for s in subjects])


@api_bp.route("/subjects", methods=["POST"])
@login_required
def create_subject():
    try:
        data = parse_subject_create(_payload())
        subject = get_storage().create_subject(g.user.id, data["name"], data["exam_date"])
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create subject")
        return jsonify({"error": "Failed to create subject"}), 500

    return jsonify(subject.to_dict()), 201


@api_bp.route("/subjects/<int:subject_id>", methods=["PATCH"])
@login_required
def update_subject(subject_id):
    try:
        fields = parse_subject_update(_payload())
        subject = get_storage().update_subject(subject_id, fields)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update subject %s", subject_id)
        return jsonify({"error": "Failed to update subject"}), 500

    return jsonify(subject.to_dict())


@api_bp.route("/subjects/<int:subject_id>/tasks", methods=["GET"])
@login_required
def list_subject_tasks(subject_id):
    try:
        tasks = get_storage().get_tasks_for_subject(subject_id)
    except Exception:
        current_app.logger.exception("Failed to list tasks for subject %s", subject_id)
        return jsonify({"error": "Failed to fetch tasks"}), 500

    return jsonify([t.to_dict() for t in tasks])


@api_bp.route("/subjects/<int:subject_id>/fetch-chapters", methods=["POST"])
@login_required
def fetch_chapters(subject_id):
    try:
        tasks = fetch_chapters_for_subject(
            get_storage(), get_completion_client(), subject_id, g.user
        )
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except GradeNotSetError as e:
        return jsonify({"error": str(e)}), 400
    except EmptyChapterListError:
        return jsonify({"error": "No chapters found for this subject"}), 404
    except CompletionError:
        current_app.logger.exception("Chapter generation failed for subject %s", subject_id)
        return jsonify({"error": "Failed to fetch chapters"}), 500
    except Exception:
        current_app.logger.exception("Unexpected error fetching chapters for subject %s", subject_id)
        return jsonify({"error": "Failed to fetch chapters"}), 500

    current_app.logger.info("Fetched %d chapter(s) for subject %s", len(tasks), subject_id)
    return jsonify([t.to_dict() for t in tasks])


# =========================================================
# TASKS
# =========================================================

@api_bp.route("/tasks", methods=["POST"])
@login_required
def create_task():
    try:
        data = parse_task_create(_payload())
        task = get_storage().create_task(data["subject_id"], data["description"])
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create task")
        return jsonify({"error": "Failed to create task"}), 500

    return jsonify(task.to_dict()), 201


@api_bp.route("/tasks/<int:task_id>", methods=["PATCH"])
@login_required
def update_task(task_id):
    try:
        fields = parse_task_update(_payload())
        task = get_storage().update_task(task_id, fields)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update task %s", task_id)
        return jsonify({"error": "Failed to update task"}), 500

    return jsonify(task.to_dict())


# =========================================================
# STUDY LOGS + PROGRESS
# =========================================================

@api_bp.route("/study-logs", methods=["POST"])
@login_required
def create_study_log():
    try:
        data = parse_study_log_create(_payload())
        log = get_storage().create_study_log(
            g.user.id, data["subject_id"], data["duration"], data["date"]
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create study log")
        return jsonify({"error": "Failed to create study log"}), 500

    return jsonify(log.to_dict()), 201


@api_bp.route("/study-logs", methods=["GET"])
@login_required
def list_study_logs():
    try:
        logs = get_storage().get_study_logs_for_user(g.user.id)
    except Exception:
        current_app.logger.exception("Failed to list study logs for user %s", g.user.id)
        return jsonify({"error": "Failed to fetch study logs"}), 500

    return jsonify([log.to_dict() for log in logs])


@api_bp.route("/study-logs/export", methods=["GET"])
@login_required
def export_study_logs():
    csv_buffer = get_study_logs_as_csv(get_storage(), g.user.id)
    return Response(
        csv_buffer.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=study_logs.csv"}
    )


@api_bp.route("/progress", methods=["GET"])
@login_required
def progress():
    return jsonify(get_progress_summary(get_storage(), g.user.id))


# =========================================================
# AI CHAT
# =========================================================

@api_bp.route("/chat", methods=["POST"])
@login_required
def chat():
    try:
        message = parse_chat_message(_payload())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        reply = chat_reply(get_completion_client(), message)
    except Exception:
        current_app.logger.exception("Chat request failed")
        return jsonify({"error": "Failed to process chat request"}), 500

    return jsonify({"response": reply})
