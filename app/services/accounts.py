"""Account service: registration and login against the users table."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import create_access_token, hash_password, verify_password
from app.models import User

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class AccountError(Exception):
    """Base for account failures; message is safe to show to the client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(AccountError):
    """Email or password missing or empty."""


class EmailExistsError(AccountError):
    """Another account already uses the email."""


class UserNotFoundError(AccountError):
    """No account has the email given at login."""


class InvalidPasswordError(AccountError):
    """Password does not match the stored hash."""


class AccountServiceError(AccountError):
    """The store failed; details are logged, not returned."""


@dataclass(frozen=True)
class LoginResult:
    token: str
    role: str


def register(db: Session, email: str | None, password: str | None, role: str = DEFAULT_ROLE) -> User:
    """
    Create an account with a bcrypt-hashed password.

    Raises InvalidInputError for empty fields, EmailExistsError for a taken
    email (including a concurrent insert hitting the unique index) and
    AccountServiceError when the store fails.
    """
    if not email or not password:
        raise InvalidInputError("Invalid input")
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing is not None:
            logger.info("Registration rejected: email already exists")
            raise EmailExistsError("Email already exists")
        user = User(email=email, password_hash=hash_password(password), role=role)
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailExistsError("Email already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Registration failed")
        raise AccountServiceError("Registration failed") from e
    logger.info("User registered", extra={"user_id": user.id, "role": user.role})
    return user


def login(db: Session, email: str | None, password: str | None) -> LoginResult:
    """
    Check credentials and issue a bearer token carrying {id, role}.

    Raises UserNotFoundError, InvalidPasswordError or AccountServiceError.
    """
    try:
        user = db.query(User).filter(User.email == email).first() if email else None
    except SQLAlchemyError as e:
        logger.exception("Login failed")
        raise AccountServiceError("Login failed") from e
    if user is None:
        raise UserNotFoundError("User not found")
    if not password or not verify_password(password, user.password_hash):
        raise InvalidPasswordError("Invalid password")
    return LoginResult(token=create_access_token(user.id, user.role), role=user.role)
