# server/core/security.py

from datetime import datetime, timedelta, timezone
from jose import JOSEError, JWTError, jwt
from passlib.context import CryptContext
from server.core.exceptions import InfrastructureError, InvalidTokenError


BCRYPT_ROUNDS = 10
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


# -------------------------------
# Password hashing
# -------------------------------

class PasswordHasher:
    """
    Salted bcrypt hashing with a fixed work factor.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            # stored value is not a recognizable hash
            return False


# -------------------------------
# Token issuance
# -------------------------------

class TokenIssuer:
    """
    Issues and decodes signed, time-limited access tokens.
    Tokens are not stored server-side; they carry the user's id and
    username plus issuance and expiry times.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = ALGORITHM,
        expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        if not secret_key:
            raise ValueError("JWT secret key cannot be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expires_minutes)

    def issue(self, user_id, username: str) -> str:
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": username,
            "id": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self._expires,
        }
        try:
            return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        except JOSEError as e:
            raise InfrastructureError() from e

    def decode(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            raise InvalidTokenError() from e

        if payload.get("id") is None or payload.get("username") is None:
            raise InvalidTokenError()
        return payload
