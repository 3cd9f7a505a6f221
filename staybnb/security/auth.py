import os
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4
from dotenv import load_dotenv
from passlib.context import CryptContext
from fastapi import HTTPException, Depends, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import or_
from sqlalchemy.orm import Session
from staybnb.models.user_model import User
from staybnb.database import get_db
from staybnb.utils.token_blacklist import token_blacklist_service

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/token", auto_error=False)


def authentication_required(detail: str = "Authentication required") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def authenticate_user(db: Session, credential: str, password: str) -> User:
    """Look the user up by email or username and check the password"""
    user = (
        db.query(User)
        .filter(or_(User.email == credential, User.username == credential), User.is_active == True)
        .first()
    )
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def _create_token(data: dict, token_type: str, expires_delta: timedelta):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({
        "exp": expire,
        "jti": str(uuid4()),
        "iat": datetime.now(timezone.utc),
        "type": token_type,
    })
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt, expire


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    return _create_token(data, "access", expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None):
    return _create_token(data, "refresh", expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def _user_from_token(token: str, expected_type: str, db: Session, invalid_detail: str) -> User:
    credentials_exception = authentication_required(invalid_detail)
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    jti = payload.get("jti")
    if user_id is None or jti is None or payload.get("type") != expected_type:
        raise credentials_exception

    if token_blacklist_service.is_revoked(db, jti):
        raise authentication_required("Token has been revoked")

    try:
        user_pk = int(user_id)
    except (TypeError, ValueError):
        raise credentials_exception

    user = db.query(User).filter(User.id == user_pk, User.is_active == True).first()
    if user is None:
        raise credentials_exception
    return user


def verify_refresh_token(token: str, db: Session) -> User:
    """Verify refresh token and return user"""
    return _user_from_token(token, "refresh", db, "Invalid refresh token")


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise authentication_required()
    return _user_from_token(token, "access", db, "Authentication required")


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Get current user and ensure they are active (not logged out)"""
    if current_user.status != "active":
        raise authentication_required("User is currently logged out")
    return current_user
