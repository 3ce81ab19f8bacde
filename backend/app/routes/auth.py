import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user
from app.core.errors import AuthError, RequestValidationFailed
from app.core.serialization import RecordOut
from app.models.user import User
from app.services import token_service, user_service
from app.services.notifications import send_welcome_email


logger = logging.getLogger(__name__)

router = APIRouter()


class UserOut(RecordOut):
    name: str
    email: str


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    background_tasks: BackgroundTasks,
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
):
    result = user_service.register_user(db, payload or {})
    if not result.ok:
        raise RequestValidationFailed(result.errors)

    user = result.value
    background_tasks.add_task(send_welcome_email, user.email, user.name)
    return {
        "message": "User registered successfully",
        "status": True,
        "user": UserOut.model_validate(user),
    }


@router.post("/login")
def login(payload: Optional[Dict[str, Any]] = Body(None), db: Session = Depends(get_db)):
    validated = user_service.validate_login(payload or {})
    if not validated.ok:
        raise RequestValidationFailed(validated.errors)

    credentials = validated.value
    user = user_service.authenticate(db, credentials["email"], credentials["password"])
    if not user:
        raise AuthError("Invalid login credentials")

    access_token = token_service.issue_token(db, user)
    logger.info("Login for user_id=%s", user.id)
    return {
        "message": "Login successful",
        "access_token": access_token,
        "token_type": "Bearer",
    }


@router.get("/profile")
def profile(current_user: User = Depends(get_current_user)):
    return {
        "status": True,
        "message": "User profile information",
        "data": UserOut.model_validate(current_user),
    }


@router.get("/logout")
def logout(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    token_service.revoke_all(db, current_user)
    return {
        "status": True,
        "message": "Logout successful",
    }
