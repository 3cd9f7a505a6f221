from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import Annotated, Optional
from staybnb.services.user_crud import user_crud
from staybnb.schemas.base_schema import MessageResponse
from staybnb.schemas.user_schema import UserCreate, UserOut, UserLogin, LoginResponse, \
    RefreshTokenRequest, RefreshTokenResponse
from staybnb.database import get_db
from staybnb.security.auth import oauth2_scheme, get_current_user, get_current_active_user
from staybnb.utils.user_app_service import user_app_service
from staybnb.validation import validated_body, SIGNUP_RULES, LOGIN_RULES
from staybnb.models.user_model import User
from staybnb.logger import get_logger


user_router = APIRouter()
logger = get_logger(__name__)


# AUTH ENDPOINTS

@user_router.post("/auth/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(
        user: UserCreate = Depends(validated_body(UserCreate, SIGNUP_RULES)),
        db: Session = Depends(get_db),
):
    """Register a new user"""
    try:
        logger.info(f"Registering user: {user.email}")
        db_user = user_crud.create_user(db, user)
        logger.info(f"User registered successfully: {user.email}")
        return UserOut.model_validate(db_user)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering user {user.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while registering user"
        )


@user_router.post("/token", response_model=LoginResponse)
def user_token(
        form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
        db: Session = Depends(get_db),
):
    logger.info(f"Token request for user: {form_data.username}")
    user_login = UserLogin(credential=form_data.username, password=form_data.password)

    try:
        return user_app_service.login_user(db, user_login)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during token generation for {form_data.username}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred during token generation"
        )


@user_router.post("/auth/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
def login_user(
        user_login: UserLogin = Depends(validated_body(UserLogin, LOGIN_RULES)),
        db: Session = Depends(get_db),
):
    """Login with email or username and return access and refresh tokens"""
    try:
        logger.info(f"Login attempt for user: {user_login.credential}")
        return user_app_service.login_user(db, user_login)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login for {user_login.credential}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred during login"
        )


@user_router.post("/auth/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def logout_user(
        refresh_request: Optional[RefreshTokenRequest] = None,
        current_user: User = Depends(get_current_user),
        token: str = Depends(oauth2_scheme),
        db: Session = Depends(get_db)
):
    """Logout user by blacklisting the access token and, when given, the refresh token"""
    refresh_token = refresh_request.refresh_token if refresh_request else None
    try:
        return user_app_service.logout_user(db, current_user, token, refresh_token)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during logout for user {current_user.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred during logout"
        )


@user_router.post("/auth/refresh", response_model=RefreshTokenResponse, status_code=status.HTTP_200_OK)
def refresh_access_token(refresh_request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Refresh access token using valid refresh token"""
    try:
        logger.info("Refreshing access token")
        return user_app_service.refresh_access_token(db, refresh_request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error refreshing token: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while refreshing token"
        )


@user_router.get("/me", response_model=UserOut, status_code=status.HTTP_200_OK)
def get_current_user_profile(current_user: User = Depends(get_current_active_user)):
    """Get current user profile"""
    return UserOut.model_validate(current_user)
