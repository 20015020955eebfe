from sqlalchemy import Column, Integer, String, DateTime, JSON, Uuid
import uuid
from datetime import datetime
from .database import Base


ADMIN_ROLES = ("admin", "superadmin")


class Users(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Integer, unique=True, nullable=False, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    image = Column(String, nullable=True)

    # plain reference, the unit may be deleted independently
    unit_work_id = Column(Uuid(as_uuid=True), nullable=True, index=True)

    token = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
