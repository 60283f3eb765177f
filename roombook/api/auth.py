# roombook/api/auth.py

import logging

from fastapi import APIRouter, Body, Depends, status
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roombook.api.deps import get_current_user, get_pwd_context, get_token_service
from roombook.api.schemas import SigninOut, UserOut
from roombook.core.errors import ApiError, Conflict, InternalError, Unauthorized, ValidationError
from roombook.core.security import TokenService, get_password_hash, verify_password
from roombook.database import get_db
from roombook.models.user import User as UserModel


MAX_USERNAME_LENGTH = 30
MIN_PASSWORD_LENGTH = 4

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def read_credentials(data: dict):
    username = data.get("username")
    password = data.get("password")
    if not username or not password:
        raise ValidationError("Username and password are required")
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError("Username and password must be strings")
    return username, password


def authenticate_user(db: Session, pwd_context: CryptContext, username: str, password: str):
    user = db.query(UserModel).filter(UserModel.username == username.lower()).first()
    if not user or not verify_password(pwd_context, password, user.hashed_password):
        return None
    return user


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def signup(
    data: dict = Body(...),
    db: Session = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context),
):
    try:
        username, password = read_credentials(data)
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError("Username must be 30 characters or less")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 4 characters long")

        username = username.lower()
        if db.query(UserModel).filter(UserModel.username == username).first():
            raise Conflict("Username already exists")

        user = UserModel(username=username, hashed_password=get_password_hash(pwd_context, password))
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # lost a race against a concurrent signup
            db.rollback()
            raise Conflict("Username already exists")
        db.refresh(user)

        logger.info("Created user %s", user.id)
        return user
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Error creating user")
        raise InternalError("Failed to create user") from e


@router.post("/signin", response_model=SigninOut)
def signin(
    data: dict = Body(...),
    db: Session = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        username, password = read_credentials(data)
        user = authenticate_user(db, pwd_context, username, password)
        if not user:
            raise Unauthorized("Invalid username or password")

        token = tokens.issue(user.id)
        logger.info("User %s signed in", user.id)
        return SigninOut(user=UserOut.model_validate(user), token=token)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Error signing in")
        raise InternalError("Failed to sign in") from e


@router.get("/me", response_model=UserOut)
def read_users_me(current_user: UserModel = Depends(get_current_user)):
    return current_user
