# stockflow/core/security.py
from datetime import datetime, timedelta
from typing import Any, Optional, Union

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from stockflow.core.config import settings
from stockflow.core.errors import AuthenticationError
from stockflow.models.actor import ActorKind, AdminActor, EmployeeActor, make_actor


def create_access_token(
        subject: Union[str, Any],
        role: ActorKind = ActorKind.EMPLOYEE,
        expires_delta: Optional[timedelta] = None
) -> str:
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject), "role": ActorKind(role).value}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: Optional[str]) -> Union[AdminActor, EmployeeActor]:
    """
    Validate a bearer token and return the actor it identifies.

    Raises:
        AuthenticationError: If the token is missing, expired, or lacks the sub/role claims
    """
    if not token:
        raise AuthenticationError("Not authenticated")

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        raise AuthenticationError("Could not validate credentials")

    try:
        return make_actor(role, subject)
    except PydanticValidationError:
        raise AuthenticationError(f"Unknown role in token: {role}")
