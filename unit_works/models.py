from sqlalchemy import Column, String, DateTime, JSON, Uuid
import uuid
from datetime import datetime
from auth.database import Base


class UnitWorks(Base):
    __tablename__ = "unit_works"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    image = Column(JSON, nullable=False, default=list)
    detail = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
