# study_planner/services/chapter_service.py
import logging

import requests
from flask import current_app

from study_planner.services.storage_service import NotFoundError

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """The completion service failed or returned something unusable."""


class EmptyChapterListError(Exception):
    pass


class GradeNotSetError(ValueError):
    pass


def get_completion_client():
    return current_app.extensions["completion_client"]


class CompletionClient:
    """Thin wrapper over an OpenRouter-style chat-completions endpoint."""

    def __init__(self, url, api_key, model, timeout):
        self.url = url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            url=config["OPENROUTER_URL"],
            api_key=config.get("OPENROUTER_API_KEY"),
            model=config["OPENROUTER_MODEL"],
            timeout=config["COMPLETION_TIMEOUT"],
        )

    def complete(self, prompt: str) -> str:
        """
        Sends a single user message and returns the reply text.
        Raises CompletionError on any failure, including a missing key.
        """
        if not self.api_key:
            raise CompletionError("Completion API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        data = {
            "model": self.model,
            "messages": [{
                "role": "user",
                "content": prompt
            }]
        }

        try:
            response = requests.post(self.url, headers=headers, json=data, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Completion request failed: %s", e)
            raise CompletionError("Completion service unreachable") from e

        if not response.ok:
            logger.warning("Completion service returned status %s", response.status_code)
            raise CompletionError(f"Completion service error: {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionError("Malformed completion response") from e

        if not isinstance(content, str):
            raise CompletionError("Malformed completion response")
        return content


# =========================================================
# CHAPTER GENERATION
# =========================================================

def build_chapter_prompt(subject_name: str, grade: str) -> str:
    return (
        f"List the main chapters of a grade {grade} {subject_name} textbook. "
        "Reply with one chapter per line in the form 'Chapter N: Title' "
        "and no other text."
    )


def parse_chapter_lines(text: str) -> list:
    return [line.strip() for line in text.splitlines() if line.strip()]


def generate_chapters(client: CompletionClient, subject_name: str, grade: str) -> list:
    """
    Returns chapter titles for (subject_name, grade), one per non-empty line
    of the completion. Lines are not checked against the "Chapter N:" shape.
    """
    if not subject_name or not grade:
        raise ValueError("Subject name and grade are required")

    chapters = parse_chapter_lines(client.complete(build_chapter_prompt(subject_name, grade)))
    if not chapters:
        raise EmptyChapterListError("No chapters returned")
    return chapters


def fetch_chapters_for_subject(storage, client, subject_id, user):
    """
    Generates chapters for a subject and stores one task per chapter.
    The tasks are written as one batch: a failure leaves no new tasks behind.
    """
    subject = storage.get_subject(subject_id)
    if not subject:
        raise NotFoundError("Subject not found")

    if not user.grade:
        raise GradeNotSetError("Please set your grade first")

    logger.info("Generating chapters for subject %s (grade %s)", subject.id, user.grade)
    chapters = generate_chapters(client, subject.name, user.grade)

    return storage.create_tasks(subject.id, chapters)


# =========================================================
# CHAT
# =========================================================

def chat_reply(client: CompletionClient, message: str) -> str:
    return client.complete(message)
