from fastapi import APIRouter, Depends

from taskmate.dependencies import get_user_store
from taskmate.schemas.user import UserCreate
from taskmate.services.user_service import register_user
from taskmate.store import UserStore

router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
def create_user(user: UserCreate, store: UserStore = Depends(get_user_store)):
    return register_user(store, user.email, user.profile)
