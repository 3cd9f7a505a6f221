from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from staybnb.schemas.user_schema import UserCreate
from staybnb.models.user_model import User
from staybnb.security.auth import get_password_hash
from staybnb.logger import get_logger

logger = get_logger(__name__)


class UserCRUD:
    @staticmethod
    def create_user(db: Session, user: UserCreate) -> User:
        existing_user = (
            db.query(User)
            .filter(or_(User.email == user.email, User.username == user.username))
            .first()
        )
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with that email or username already exists",
            )

        try:
            db_user = User(
                first_name=user.first_name,
                last_name=user.last_name,
                username=user.username,
                email=user.email,
                password_hash=get_password_hash(user.password),
                status="active",
                is_active=True,
            )
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
            logger.info(f"User created: {db_user.id} ({db_user.username})")
            return db_user

        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user {user.email}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while registering user",
            )


user_crud = UserCRUD()
