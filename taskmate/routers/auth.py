from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from taskmate.schemas.user import SessionRequest
from taskmate.utils.auth import clear_session_cookie, create_session_token, set_session_cookie

router = APIRouter(tags=["auth"])


@router.post("/jwt")
def issue_session(body: SessionRequest, response: Response):
    if not body.email:
        return JSONResponse(status_code=400, content={"message": "Email is required"})

    set_session_cookie(response, create_session_token(body.email))
    return {"success": True}


@router.get("/logout")
def end_session(response: Response):
    clear_session_cookie(response)
    return {"success": True}
