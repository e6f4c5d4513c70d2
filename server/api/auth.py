# server/api/auth.py

from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from server.core.auth_service import AuthService
from server.core.exceptions import InvalidTokenError
from server.database import get_db


router = APIRouter(prefix="/api")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


class Credentials(BaseModel):
    # optional so that missing fields produce the service's own messages
    username: str | None = None
    password: str | None = None


class RegisterResponse(BaseModel):
    message: str
    userId: str
    token: str


class Token(BaseModel):
    token: str


class User(BaseModel):
    id: str
    username: str


def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db, request.app.state.hasher, request.app.state.tokens)


def _fields(body: Credentials | None) -> tuple[str | None, str | None]:
    # an absent or null body counts as empty fields
    if body is None:
        return None, None
    return body.username, body.password


# Handlers are plain functions so the bcrypt work runs on the threadpool.

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: Credentials | None = None, service: AuthService = Depends(get_auth_service)):
    registered = service.register(*_fields(body))
    return {
        "message": "User registered successfully",
        "userId": registered.user_id,
        "token": registered.token,
    }


@router.post("/login", response_model=Token)
def login(body: Credentials | None = None, service: AuthService = Depends(get_auth_service)):
    return {"token": service.login(*_fields(body))}


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    service: AuthService = Depends(get_auth_service),
) -> dict:
    if not token:
        raise InvalidTokenError()
    return service.identify(token)


@router.get("/me", response_model=User)
def read_users_me(current_user: dict = Depends(get_current_user)):
    return current_user
