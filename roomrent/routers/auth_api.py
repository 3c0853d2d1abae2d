from fastapi import APIRouter, Depends, Request, Response, HTTPException
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..limiter import limiter
from ..models import User
from ..schemas import LoginIn, UserOut, dump
from ..security import set_session, clear_session, verify_password, require_api_user

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
@limiter.limit(settings.RATE_LIMIT_AUTH_API)
def api_login(request: Request, payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email).first()
    if not user or not user.hashed_password or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=400, detail="Invalid email or password")
    set_session(response, user.id)
    return {"success": True, "data": dump(UserOut, user)}


@router.post("/logout")
def api_logout(response: Response):
    clear_session(response)
    return {"success": True}


@router.get("/me")
def api_me(user: User = Depends(require_api_user)):
    return {"success": True, "data": dump(UserOut, user)}
