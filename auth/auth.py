import os
import uuid
import logging
from datetime import datetime, timedelta
from typing import Iterable

from dotenv import load_dotenv
from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.orm import Session

from common.errors import Conflict, Forbidden, NotFound, Unauthorized
from .database import get_db
from .models import Users, ADMIN_ROLES
from .schemas import RegisterModel, UserCreateModel

load_dotenv()

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))

security = HTTPBearer(description="Masukkan token bearer di sini", auto_error=False)


def hash_password(password: str) -> str:
    truncated = password.encode("utf-8")[:72]
    return pwd_context.hash(truncated)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    truncated = plain_password.encode("utf-8")[:72]
    return pwd_context.verify(truncated, hashed_password)


def create_access_token(user: Users, expires_delta: timedelta = None) -> str:
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        # unique per issue so two logins in the same second get distinct tokens
        "jti": str(uuid.uuid4()),
    }
    expire = datetime.utcnow() + (expires_delta if expires_delta else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    payload.update({"exp": expire})
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def parse_uuid(value, what: str = "Resource") -> uuid.UUID:
    """Parse an id from a path or body; malformed ids are reported as not found."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise NotFound(f"{what} not found")


def get_user_by_email(email: str, db: Session):
    return db.query(Users).filter(func.lower(Users.email) == email.lower()).first()


def get_user_by_id(user_id, db: Session) -> Users:
    user = db.query(Users).filter(Users.id == parse_uuid(user_id, "User")).first()
    if not user:
        raise NotFound("User not found")
    return user


def next_user_number(db: Session) -> int:
    current = db.query(func.max(Users.user_id)).scalar()
    return (current or 0) + 1


def create_user(db: Session, data: RegisterModel, role: str = "user", unit_work_id=None, image: str = None) -> Users:
    if get_user_by_email(data.email, db):
        raise Conflict("Email already registered")

    new_user = Users(
        user_id=next_user_number(db),
        name=data.name,
        email=data.email,
        password=hash_password(data.password),
        role=role,
        image=image,
        unit_work_id=unit_work_id,
        token=[],
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


def register_user(data: RegisterModel, db: Session) -> Users:
    return create_user(db, data, role="user")


def create_staff_user(data: UserCreateModel, db: Session, caller: Users) -> Users:
    if data.role == "superadmin" and caller.role != "superadmin":
        raise Forbidden("Only superadmin can create superadmin accounts")

    unit_work_id = None
    if data.unit_work_id:
        from unit_works.models import UnitWorks

        unit_work_id = parse_uuid(data.unit_work_id, "Unit work")
        if not db.query(UnitWorks).filter(UnitWorks.id == unit_work_id).first():
            raise NotFound("Unit work not found")

    return create_user(db, data, role=data.role, unit_work_id=unit_work_id, image=data.image)


def token_expired(token: str, now: datetime = None) -> bool:
    try:
        exp = jwt.get_unverified_claims(token).get("exp")
    except JWTError:
        return True
    if exp is None:
        return False
    now = now or datetime.utcnow()
    return datetime.utcfromtimestamp(exp) <= now


def login_user(email: str, password: str, db: Session):
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.password):
        raise Unauthorized("Invalid email or password")

    token = create_access_token(user)
    # expired tokens are dropped so the list only holds live sessions
    active = [t for t in (user.token or []) if not token_expired(t)]
    user.token = [*active, token]
    db.commit()
    return token, user


def logout_user(user: Users, token: str, db: Session):
    user.token = [t for t in (user.token or []) if t != token]
    db.commit()


def seed_superadmin(db: Session):
    email = os.getenv("SUPERADMIN_EMAIL")
    password = os.getenv("SUPERADMIN_PASSWORD")
    if not email or not password:
        return None

    existing = get_user_by_email(email, db)
    if existing:
        logger.info(f"Superadmin {email} exists")
        return existing

    admin = Users(
        user_id=next_user_number(db),
        name="Super Admin",
        email=email,
        password=hash_password(password),
        role="superadmin",
        token=[],
    )
    db.add(admin)
    db.commit()
    logger.info(f"Superadmin {email} created")
    return admin


def get_current_token(credentials: HTTPAuthorizationCredentials = Security(security)) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized()
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    db: Session = Depends(get_db),
) -> Users:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise Unauthorized("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Invalid token: no subject")

    try:
        user = db.query(Users).filter(Users.id == uuid.UUID(user_id)).first()
    except ValueError:
        raise Unauthorized("Invalid token: bad subject")

    if not user or token not in (user.token or []):
        raise Unauthorized()
    return user


def require_roles(roles: Iterable[str], message: str = None):
    allowed = tuple(roles)

    def dependency(current_user: Users = Depends(get_current_user)) -> Users:
        if current_user.role not in allowed:
            raise Forbidden(message or "You are not allowed to access")
        return current_user

    return dependency


get_current_admin = require_roles(ADMIN_ROLES, "Only admin can perform this action")
