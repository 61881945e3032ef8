import logging
import os
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session, select
from google.oauth2 import id_token
from google.auth.transport import requests as grequests

from rahat.db.db import get_session
from rahat.models.user import User
from rahat.utils.auth_helper import create_access_token, get_current_actor_required
from rahat.utils.session_provider import Actor

logger = logging.getLogger(__name__)

router = APIRouter()

CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")

if not CLIENT_ID or not os.getenv("JWT_SECRET"):
    raise ValueError("Environment variables not set")


class GoogleIDToken(BaseModel):
    id_token: str


class TokenResponse(BaseModel):
    access_token: str
    user_id: str
    role: str


@router.post("/google", response_model=TokenResponse)
def google_auth(payload: GoogleIDToken, session: Session = Depends(get_session)):
    try:
        idinfo = id_token.verify_oauth2_token(payload.id_token, grequests.Request(), CLIENT_ID)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid Google ID token")

    # idinfo now trusted and parsed by Google libs
    google_id = idinfo["sub"]

    db_user = session.exec(select(User).where(User.public_id == google_id)).first()
    if not db_user:
        # Responder roles are granted out of band; new accounts start without one
        db_user = User(
            public_id=google_id,
            name=idinfo.get("name") or idinfo.get("email", "User"),
            image=idinfo.get("picture") or "",
            email=idinfo.get("email", ""),
        )
        session.add(db_user)
        session.commit()
        session.refresh(db_user)
        logger.info("Registered user %s", db_user.public_id)

    return TokenResponse(
        access_token=create_access_token(db_user),
        user_id=db_user.public_id,
        role=db_user.role,
    )


@router.get("/me", response_model=Actor)
async def get_me(actor: Actor = Depends(get_current_actor_required)):
    return actor
