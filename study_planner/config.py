# study_planner/config.py
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///study_planner.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Completion service (chapter generation + chat)
    OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY")
    OPENROUTER_URL = os.environ.get(
        "OPENROUTER_URL", "https://openrouter.ai/api/v1/chat/completions"
    )
    OPENROUTER_MODEL = os.environ.get("OPENROUTER_MODEL", "gpt-3.5-turbo")
    COMPLETION_TIMEOUT = float(os.environ.get("COMPLETION_TIMEOUT", "30"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    OPENROUTER_API_KEY = "test-key"
    OPENROUTER_URL = "https://completions.test/v1/chat/completions"
    COMPLETION_TIMEOUT = 5
