from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError

from campus_reservations.core.jwt import decode_access_token
from campus_reservations.schemas.actor import Actor

security = HTTPBearer()


def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Actor:
    """Turn the session layer's bearer token into the actor context.

    Identity is trusted as issued; role checks happen in the services.
    """
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )

    if "sub" not in payload or "role" not in payload:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    try:
        return Actor(
            user_id=payload["sub"],
            role=payload["role"],
            club_id=payload.get("club_id"),
            name=payload.get("name"),
        )
    except ValidationError:
        raise HTTPException(status_code=401, detail="Invalid role")
