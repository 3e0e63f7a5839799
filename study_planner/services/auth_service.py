import logging

logger = logging.getLogger(__name__)


def authenticate_user(storage, username: str, password: str):
    """
    Authenticate user using username & password.
    Returns User object if valid, else None.
    """
    if not username or not password:
        return None

    user = storage.get_user_by_username(username)
    if not user:
        logger.warning("Login failed for unknown user %r", username)
        return None

    if not user.check_password(password):
        logger.warning("Login failed for user %r: bad password", username)
        return None

    return user
