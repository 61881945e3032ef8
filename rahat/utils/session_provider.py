"""
Per-request session context.

The context starts out ``unknown``. Reading the bearer token's claims gives a
best-effort actor straight away, but the role in a token can be stale, so anything
permission-sensitive must go through ``current_actor()``, which looks the user up
and moves the context to ``resolved`` (or ``anonymous``).
"""

import logging
from enum import Enum
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from rahat.models.user import User
from rahat.utils.errors import AuthUnavailable, PermissionDenied

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNKNOWN = "unknown"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    ANONYMOUS = "anonymous"


class Actor(BaseModel):
    id: str
    display_name: str
    role: Optional[str] = None


class SessionContext:
    def __init__(self, engine, claims: Optional[dict] = None):
        self.engine = engine
        self.claims = claims
        self.state = SessionState.UNKNOWN
        self._actor: Optional[Actor] = None

    def current_actor_best_effort(self) -> Optional[Actor]:
        if self.state in (SessionState.RESOLVED, SessionState.ANONYMOUS):
            return self._actor

        if not self.claims or not self.claims.get("sub"):
            return None

        return Actor(
            id=self.claims["sub"],
            display_name=self.claims.get("name") or "User",
            role=self.claims.get("role"),
        )

    def _lookup_user(self, public_id: str) -> Optional[User]:
        with Session(self.engine) as session:
            return session.exec(select(User).where(User.public_id == public_id)).first()

    async def current_actor(self) -> Optional[Actor]:
        if self.state in (SessionState.RESOLVED, SessionState.ANONYMOUS):
            return self._actor

        if not self.claims or not self.claims.get("sub"):
            self.state = SessionState.ANONYMOUS
            return None

        self.state = SessionState.RESOLVING

        try:
            user = await run_in_threadpool(self._lookup_user, self.claims["sub"])
        except SQLAlchemyError as e:
            self.state = SessionState.UNKNOWN
            logger.error("User lookup failed: %s", e, exc_info=True)
            raise AuthUnavailable()

        if not user:
            self.state = SessionState.ANONYMOUS
            return None

        self._actor = Actor(id=user.public_id, display_name=user.name, role=user.role)
        self.state = SessionState.RESOLVED

        return self._actor

    def require_resolved(self) -> Actor:
        if self.state != SessionState.RESOLVED or not self._actor:
            raise PermissionDenied("Sign in is still being verified")

        return self._actor
