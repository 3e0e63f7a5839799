# study_planner/services/progress_service.py
import math
import pandas as pd
from io import StringIO

from study_planner.utils.time_utils import format_timestamp


def calculate_overall_progress(total_tasks, completed_tasks, total_subjects, completed_subjects):
    """
    Completed tasks and completed subjects weigh equally; each finished
    subject counts as its average share of tasks.
    """
    if total_tasks == 0:
        return 0

    subject_credit = completed_subjects * total_tasks / total_subjects
    # half-up rounding
    return math.floor((completed_tasks + subject_credit) / (total_tasks * 2) * 100 + 0.5)


def get_progress_summary(storage, user_id):
    subjects = storage.get_subjects_for_user(user_id)

    total_tasks = 0
    completed_tasks = 0
    for subject in subjects:
        tasks = storage.get_tasks_for_subject(subject.id)
        total_tasks += len(tasks)
        completed_tasks += sum(1 for t in tasks if t.completed)

    completed_subjects = sum(1 for s in subjects if s.completed)
    logs = storage.get_study_logs_for_user(user_id)

    return {
        "totalSubjects": len(subjects),
        "completedSubjects": completed_subjects,
        "totalTasks": total_tasks,
        "completedTasks": completed_tasks,
        "overallProgress": calculate_overall_progress(
            total_tasks, completed_tasks, len(subjects), completed_subjects
        ),
        "totalStudyMinutes": sum(log.duration for log in logs),
    }


# =========================================================
# CSV EXPORT
# =========================================================

STUDY_LOG_COLUMNS = ["ID", "Subject ID", "Subject", "Duration", "Date"]


def get_study_logs_as_csv(storage, user_id):
    subject_names = {s.id: s.name for s in storage.get_subjects_for_user(user_id)}

    data = [
        {
            "ID": log.id,
            "Subject ID": log.subject_id,
            "Subject": subject_names.get(log.subject_id, ""),
            "Duration": log.duration,
            "Date": format_timestamp(log.date)
        }
        for log in storage.get_study_logs_for_user(user_id)
    ]

    df = pd.DataFrame(data, columns=STUDY_LOG_COLUMNS)

    buffer = StringIO()
    df.to_csv(buffer, index=False)
    buffer.seek(0)
    return buffer
