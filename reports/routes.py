import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, Query as SAQuery

from auth.auth import get_current_user, parse_uuid
from auth.database import get_db
from auth.models import Users
from common.errors import NotFound
from common.responses import success
from . import service
from .enrichment import enrich_report, enrich_reports
from .models import Reports, ReportStatus
from .schemas import ReportCreateSchema, AssignUnitWorkSchema, OfficerDoneSchema

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)


def filter_reports(query: SAQuery, q: str = "", status: str = "") -> SAQuery:
    if q:
        query = query.filter(Reports.title.icontains(q, autoescape=True))
    if status:
        query = query.filter(Reports.status == status)
    return query


def paginate(db: Session, query: SAQuery, limit: int, skip: int) -> dict:
    count = query.count()
    reports = (
        query.order_by(Reports.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return {"count": count, "data": enrich_reports(db, reports)}


@router.post("")
def create_report(
    payload: ReportCreateSchema,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    logger.info(f"POST /reports - new report from user {current_user.id}")
    report = service.create_report(
        db,
        title=payload.title,
        description=payload.description,
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
        images=payload.imageReport,
        category=payload.category,
        reporter=current_user,
    )
    return success({"reports": enrich_report(db, report)})


@router.get("/list")
def list_reports(db: Session = Depends(get_db)):
    reports = db.query(Reports).order_by(Reports.created_at.desc()).all()
    return success(enrich_reports(db, reports))


@router.get("/unit-work/{unit_work_id}")
def get_reports_by_unit_work(
    unit_work_id: str,
    limit: int = Query(8, ge=1, le=100),
    skip: int = Query(0, ge=0),
    q: str = "",
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(Reports).filter(
        Reports.unit_work_id == parse_uuid(unit_work_id, "Unit work"),
        Reports.status == ReportStatus.PROCESSING.value,
    )
    page = paginate(db, filter_reports(query, q=q), limit, skip)
    return success(page["data"], count=page["count"])


@router.post("/assign")
def assign_report(
    payload: AssignUnitWorkSchema,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    logger.info(f"POST /reports/assign - report {payload.report_id} to unit {payload.unit_work_id}")
    report = service.assign_unit_work(db, payload.report_id, payload.unit_work_id, current_user)
    return success(
        {"report": enrich_report(db, report)},
        message="Unit work has been assigned successfully",
    )


@router.get("/user/{user_id}")
def get_reports_by_user(
    user_id: str,
    limit: int = Query(8, ge=1, le=100),
    skip: int = Query(0, ge=0),
    q: str = "",
    status: Optional[str] = "",
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(Reports).filter(Reports.reporter_id == parse_uuid(user_id, "User"))
    page = paginate(db, filter_reports(query, q=q, status=status), limit, skip)
    if not page["data"]:
        raise NotFound("No reports found")
    return success(page["data"], count=page["count"])


@router.post("/officer/done")
def finish_report_by_officer(
    payload: OfficerDoneSchema,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    logger.info(f"POST /reports/officer/done - report {payload.id_report} by {current_user.id}")
    officer_report = service.complete_by_officer(
        db, payload.id_report, payload.message, payload.imageReport, current_user
    )
    return success(
        {"idReport": officer_report.id},
        message="Report sent successfully",
    )


@router.get("/officer/{officer_id}")
def get_reports_by_officer(
    officer_id: str,
    limit: int = Query(8, ge=1, le=100),
    skip: int = Query(0, ge=0),
    q: str = "",
    status: Optional[str] = "",
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(Reports).filter(Reports.officer_id == parse_uuid(officer_id, "Officer"))
    page = paginate(db, filter_reports(query, q=q, status=status), limit, skip)
    if not page["data"]:
        raise NotFound("No reports found")
    return success(page["data"], count=page["count"])


@router.get("/{report_id}")
def get_report_detail(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    report = service.get_report(db, report_id)
    return success(enrich_report(db, report))


@router.delete("/{report_id}")
def delete_report(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    service.delete_report(db, report_id, current_user)
    return success(None, message="Report deleted successfully")
