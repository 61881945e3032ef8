import os
from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError

from rahat.db.db import get_engine
from rahat.models.user import User
from rahat.utils.errors import PermissionDenied
from rahat.utils.report_kinds import ROLE_NGO, ROLE_SAR
from rahat.utils.session_provider import Actor, SessionContext

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60))  # 1 day

bearer_scheme_optional = HTTPBearer(auto_error=False)


def create_access_token(user: User) -> str:
    now = datetime.now(timezone.utc)

    jwt_payload = {
        "sub": user.public_id,
        "name": user.name,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }

    return jwt.encode(jwt_payload, os.getenv("JWT_SECRET"), algorithm=ALGORITHM)


def decode_token(token: str):
    return jwt.decode(token, os.getenv("JWT_SECRET"), algorithms=[ALGORITHM])


def get_session_context(
    token: HTTPAuthorizationCredentials = Depends(bearer_scheme_optional),
    db_engine=Depends(get_engine),
) -> SessionContext:
    if not token:
        return SessionContext(db_engine)

    try:
        claims = decode_token(token.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return SessionContext(db_engine, claims)


async def get_current_actor_required(
    context: SessionContext = Depends(get_session_context),
) -> Actor:
    actor = await context.current_actor()

    if not actor:
        raise HTTPException(status_code=401, detail="Not authenticated")

    return actor


async def get_responder_required(
    actor: Actor = Depends(get_current_actor_required),
) -> Actor:
    # role comes from the users table, not from the token
    if actor.role not in (ROLE_NGO, ROLE_SAR):
        raise PermissionDenied("NGO or Search & Rescue access required")

    return actor
