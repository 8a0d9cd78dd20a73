import logging

from taskmate.store import UserStore

logger = logging.getLogger(__name__)


def register_user(store: UserStore, email: str, profile: dict) -> dict:
    """Insert the user once; later calls for the same email are a no-op."""
    inserted_id = store.insert_if_absent(email, profile)
    if inserted_id is None:
        return {"message": "User already exists", "insertedId": None}
    logger.info("Registered user %s", email)
    return {"acknowledged": True, "insertedId": inserted_id}
