"""Report lifecycle.

A report starts in ``Menunggu`` (waiting). Assigning it to a work unit moves it
to ``Diproses`` (processing); an officer closing it moves it to ``Selesai``
(done). ``Selesai`` and ``Ditolak`` are terminal. Every function takes the
request's ``Session`` and commits once, so multi-record writes land together
or not at all.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from auth.auth import parse_uuid
from auth.models import Users, ADMIN_ROLES
from categories.models import Categories
from common.errors import Conflict, Forbidden, NotFound
from unit_works.models import UnitWorks
from .models import Reports, OfficerReports, Comments, ReportStatus

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = (ReportStatus.DONE.value, ReportStatus.REJECTED.value)


def get_report(db: Session, report_id, for_update: bool = False) -> Reports:
    query = db.query(Reports).filter(Reports.id == parse_uuid(report_id, "Report"))
    if for_update:
        query = query.with_for_update()
    report = query.first()
    if not report:
        raise NotFound("Report not found")
    return report


def create_report(
    db: Session,
    *,
    title: str,
    description: str,
    address: str,
    latitude: str,
    longitude: str,
    category,
    reporter: Users,
    images: Optional[List[str]] = None,
) -> Reports:
    category_id = parse_uuid(category, "Category")
    if not db.query(Categories).filter(Categories.id == category_id).first():
        raise NotFound("Category not found")

    report = Reports(
        title=title,
        description=description,
        address=address,
        latitude=latitude,
        longitude=longitude,
        status=ReportStatus.WAITING.value,
        image_report=list(images or []),
        category_id=category_id,
        reporter_id=reporter.id,
        comment=[],
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info(f"Report {report.id} created by {reporter.id}")
    return report


def assign_unit_work(db: Session, report_id, unit_work_id, caller: Users) -> Reports:
    if caller.role not in ADMIN_ROLES:
        raise Forbidden("Only admin can assign reports to a unit work")

    report = get_report(db, report_id)

    unit_id = parse_uuid(unit_work_id, "Unit work")
    if not db.query(UnitWorks).filter(UnitWorks.id == unit_id).first():
        raise NotFound("Unit work not found")

    if report.status in TERMINAL_STATUSES:
        raise Conflict(f"Report is already {report.status}")

    # guarded on the current status so a report closed meanwhile is not reopened
    updated = (
        db.query(Reports)
        .filter(Reports.id == report.id, Reports.status.notin_(TERMINAL_STATUSES))
        .update(
            {"unit_work_id": unit_id, "status": ReportStatus.PROCESSING.value},
            synchronize_session=False,
        )
    )
    if updated != 1:
        db.rollback()
        raise Conflict("Report was closed by another request")

    db.commit()
    db.refresh(report)
    logger.info(f"Report {report.id} assigned to unit {unit_id} by {caller.id}")
    return report


def complete_by_officer(db: Session, report_id, message: str, images: List[str], caller: Users) -> OfficerReports:
    if caller.role == "user":
        raise Forbidden("You are not allowed to access")

    report = get_report(db, report_id)
    if report.status != ReportStatus.PROCESSING.value:
        raise Conflict(f"Only reports in {ReportStatus.PROCESSING.value} can be completed")

    officer_report = OfficerReports(
        message=message,
        image_report=list(images),
        officer_id=caller.id,
    )
    db.add(officer_report)
    db.flush()

    # only one completion can move the row out of Diproses
    updated = (
        db.query(Reports)
        .filter(Reports.id == report.id, Reports.status == ReportStatus.PROCESSING.value)
        .update(
            {
                "officer_report_id": officer_report.id,
                "officer_id": caller.id,
                "status": ReportStatus.DONE.value,
            },
            synchronize_session=False,
        )
    )
    if updated != 1:
        db.rollback()
        raise Conflict("Report was already completed by another officer")

    db.commit()
    db.refresh(officer_report)
    logger.info(f"Report {report.id} completed by officer {caller.id}")
    return officer_report


def add_comment(db: Session, report_id, message: str, author: Users) -> Comments:
    report = get_report(db, report_id, for_update=True)

    comment = Comments(name=author.name, message=message)
    db.add(comment)
    db.flush()

    report.comment = [*(report.comment or []), str(comment.id)]
    db.commit()
    db.refresh(comment)
    return comment


def purge_report(db: Session, report: Reports):
    """Stage deletion of a report and the records it owns. The caller commits."""
    comment_ids = [parse_uuid(c, "Comment") for c in (report.comment or [])]
    if comment_ids:
        db.query(Comments).filter(Comments.id.in_(comment_ids)).delete(synchronize_session=False)
    if report.officer_report_id:
        db.query(OfficerReports).filter(
            OfficerReports.id == report.officer_report_id
        ).delete(synchronize_session=False)
    db.delete(report)


def delete_report(db: Session, report_id, caller: Users):
    report = get_report(db, report_id)

    if caller.role not in ADMIN_ROLES and report.reporter_id != caller.id:
        raise Forbidden("You are not allowed to delete this report")

    purge_report(db, report)
    db.commit()
    logger.info(f"Report {report_id} deleted by {caller.id}")
