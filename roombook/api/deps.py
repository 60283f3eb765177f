# roombook/api/deps.py

import logging

from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from roombook.core.errors import InternalError, Unauthorized
from roombook.core.security import InvalidToken, TokenService
from roombook.database import get_db
from roombook.models.user import User as UserModel


logger = logging.getLogger(__name__)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_pwd_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def extract_bearer_token(authorization: str):
    parts = authorization.split()
    return parts[1] if len(parts) > 1 else None


def load_user(db: Session, user_id: str):
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> UserModel:
    """
    Resolves the user behind the "Authorization: Bearer <token>" header
    and binds it to request.state.user.
    """
    authorization = request.headers.get("authorization")
    if not authorization:
        raise Unauthorized("Please login to continue")

    try:
        user_id = tokens.verify(extract_bearer_token(authorization))
    except InvalidToken as e:
        logger.info("Rejected token: %s", e)
        raise Unauthorized("Invalid or expired token")

    try:
        user = load_user(db, user_id)
    except Exception as e:
        logger.exception("Error resolving user for token")
        raise InternalError("Failed to authenticate") from e
    if user is None:
        raise Unauthorized("User not found")

    request.state.user = user
    return user
