import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth.auth import get_current_user, get_current_admin, parse_uuid
from auth.database import get_db
from auth.models import Users
from common.errors import NotFound
from common.responses import success
from reports.models import Reports
from reports.service import purge_report
from .models import UnitWorks
from .schemas import UnitWorkCreate, UnitWorkResponse

router = APIRouter(prefix="/unit-works", tags=["unit works"])
logger = logging.getLogger(__name__)


@router.post("")
def create_unit_work(
    payload: UnitWorkCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_admin),
):
    unit = UnitWorks(name=payload.name, image=payload.image or [], detail=payload.detail)
    db.add(unit)
    db.commit()
    db.refresh(unit)
    logger.info(f"POST /unit-works - unit {unit.id} created by {current_user.email}")
    return success(UnitWorkResponse.model_validate(unit).model_dump())


@router.get("/list")
def list_unit_works(
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    units = db.query(UnitWorks).order_by(UnitWorks.created_at.desc()).all()
    return success([UnitWorkResponse.model_validate(u).model_dump() for u in units])


def delete_unit_work_cascade(db: Session, unit_id) -> dict:
    """Delete a unit together with the users assigned to it and the reports routed to it."""
    unit_id = parse_uuid(unit_id, "Unit work")
    unit = db.query(UnitWorks).filter(UnitWorks.id == unit_id).first()
    if not unit:
        raise NotFound("Unit work not found")

    users_deleted = (
        db.query(Users)
        .filter(Users.unit_work_id == unit_id)
        .delete(synchronize_session=False)
    )
    reports = db.query(Reports).filter(Reports.unit_work_id == unit_id).all()
    for report in reports:
        purge_report(db, report)
    reports_deleted = len(reports)
    db.delete(unit)
    db.commit()

    return {"users_deleted": users_deleted, "reports_deleted": reports_deleted}


@router.delete("/{unit_id}")
def delete_unit_work(
    unit_id: str,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_admin),
):
    result = delete_unit_work_cascade(db, unit_id)
    logger.info(
        f"DELETE /unit-works/{unit_id} - removed {result['users_deleted']} users "
        f"and {result['reports_deleted']} reports"
    )
    return success(result, message="Unit work, related users, and reports have been deleted")
