import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, JSON, Uuid, CheckConstraint
from auth.database import Base


class ReportStatus(str, enum.Enum):
    WAITING = "Menunggu"
    PROCESSING = "Diproses"
    DONE = "Selesai"
    REJECTED = "Ditolak"


STATUS_VALUES = tuple(s.value for s in ReportStatus)


class Reports(Base):
    __tablename__ = "reports"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    latitude = Column(String(255), nullable=True)
    longitude = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=ReportStatus.WAITING.value)
    image_report = Column(JSON, nullable=False, default=list)

    # References are stored as bare ids. Targets can disappear, see reports.enrichment.
    category_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    reporter_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    unit_work_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    officer_report_id = Column(Uuid(as_uuid=True), nullable=True)
    officer_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    comment = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            "status IN ('Menunggu', 'Diproses', 'Selesai', 'Ditolak')",
            name="reports_status_check",
        ),
    )


class OfficerReports(Base):
    __tablename__ = "officer_reports"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    message = Column(Text, nullable=False)
    image_report = Column(JSON, nullable=False, default=list)
    officer_id = Column(Uuid(as_uuid=True), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class Comments(Base):
    __tablename__ = "comments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # snapshot of the author's name at posting time
    name = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
