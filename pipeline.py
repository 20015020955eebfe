import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.database import get_db
from auth.auth import (
    register_user,
    create_staff_user,
    login_user,
    logout_user,
    get_current_user,
    get_current_token,
    get_current_admin,
    get_user_by_id,
)
from auth.models import Users
from auth.schemas import RegisterModel, UserCreateModel, LoginModel, UserResponse
from common.responses import success

router = APIRouter()

logger = logging.getLogger(__name__)


def user_payload(user: Users) -> dict:
    return UserResponse.model_validate(user).model_dump()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterModel, db: Session = Depends(get_db)):
    logger.info(f"POST /register - Register request for email: {data.email}")
    user = register_user(data, db)
    return success(user_payload(user), code=201, message="User registered successfully")


@router.post("/login")
def login(data: LoginModel, db: Session = Depends(get_db)):
    logger.info(f"POST /login - Login request for email: {data.email}")
    access_token, user = login_user(data.email, data.password, db)
    return success({
        "access_token": access_token,
        "token_type": "bearer",
        "user": user_payload(user),
    })


@router.post("/logout")
def logout(
    token: str = Depends(get_current_token),
    current_user: Users = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    logout_user(current_user, token, db)
    logger.info(f"POST /logout - user {current_user.id} logged out")
    return success(None, message="Logged out")


@router.get("/me")
def me(current_user: Users = Depends(get_current_user)):
    return success(user_payload(current_user))


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user_by_admin(
    data: UserCreateModel,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_admin),
):
    logger.info(f"POST /users - {current_user.email} creating {data.role} account {data.email}")
    user = create_staff_user(data, db, current_user)
    return success(user_payload(user), code=201, message="User created successfully")


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    return success(user_payload(get_user_by_id(user_id, db)))
