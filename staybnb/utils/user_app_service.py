from sqlalchemy.orm import Session
from staybnb.models.user_model import User
from staybnb.schemas.base_schema import MessageResponse
from staybnb.schemas.user_schema import (
    UserOut,
    UserLogin,
    LoginResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
)
from fastapi import HTTPException, status
from jose import JWTError
from staybnb.security.auth import (
    authenticate_user,
    authentication_required,
    create_access_token,
    create_refresh_token,
    verify_refresh_token,
)
from staybnb.utils.token_blacklist import token_blacklist_service, TokenRevocationError
from staybnb.logger import get_logger

logger = get_logger(__name__)


class UserService:
    @staticmethod
    def login_user(db: Session, user_login: UserLogin) -> LoginResponse:
        user = authenticate_user(db, user_login.credential, user_login.password)

        # Reactivate user status on successful login (in case they were logged out)
        if user.status != "active":
            user.status = "active"
            db.commit()
            db.refresh(user)
            logger.info(f"User status reactivated for: {user.email}")

        access_token, _ = create_access_token(data={"sub": str(user.id)})
        refresh_token, _ = create_refresh_token(data={"sub": str(user.id)})

        logger.info(f"User logged in: {user.email}")
        return LoginResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
            user=UserOut.model_validate(user),
        )

    @staticmethod
    def logout_user(
        db: Session,
        user: User,
        access_token: str,
        refresh_token: str = None,
    ) -> MessageResponse:
        """
        Logout user in one transaction by:
        1. Setting user status to 'inactive' (for logout tracking)
        2. Revoking the access token and, when given, the refresh token
        Nothing is kept unless every step is stored.
        """
        email = user.email
        try:
            user.status = "inactive"
            token_blacklist_service.revoke(db, access_token)
            if refresh_token:
                token_blacklist_service.revoke(db, refresh_token)
            token_blacklist_service.purge_expired(db)
            db.commit()

        except (JWTError, TokenRevocationError):
            db.rollback()
            raise authentication_required("Invalid refresh token")
        except Exception as e:
            logger.error(f"Error during logout for user {email}: {str(e)}")
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred during logout",
            )

        logger.info(f"User logged out: {email}")
        return MessageResponse(message="Successfully logged out")

    @staticmethod
    def refresh_access_token(
        db: Session, refresh_request: RefreshTokenRequest
    ) -> RefreshTokenResponse:
        """Rotate tokens: new ones are issued only once the old refresh token is revoked"""
        user = verify_refresh_token(refresh_request.refresh_token, db)

        try:
            token_blacklist_service.revoke(db, refresh_request.refresh_token)
            db.commit()
        except Exception as e:
            logger.error(f"Error revoking refresh token for user {user.email}: {str(e)}")
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while refreshing token",
            )

        access_token, _ = create_access_token(data={"sub": str(user.id)})
        refresh_token, _ = create_refresh_token(data={"sub": str(user.id)})

        logger.info(f"Tokens refreshed for user: {user.email}")
        return RefreshTokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
        )


user_app_service = UserService()
