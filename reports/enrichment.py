"""Resolve the ids stored on reports into response projections.

Reports keep bare ids for their reporter, unit, officer, officer report,
category and comments. Any of those targets may since have been deleted (a
unit cascade removes users, categories are deleted without checks). Such a
dangling reference is rendered with ``UNKNOWN_NAME`` instead of failing the
request; an unset optional reference is rendered as ``None``.
"""
import uuid
from typing import Callable, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from auth.models import Users
from categories.models import Categories
from unit_works.models import UnitWorks
from .models import Reports, OfficerReports, Comments

UNKNOWN_NAME = "Unknown"


def _as_uuid(value) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def load_by_ids(db: Session, model, ids: Iterable) -> Dict[uuid.UUID, object]:
    wanted = {i for i in (_as_uuid(v) for v in ids) if i is not None}
    if not wanted:
        return {}
    rows = db.query(model).filter(model.id.in_(wanted)).all()
    return {row.id: row for row in rows}


def resolve_reference(ref_id, lookup: Dict, project: Callable, unknown: dict) -> Optional[dict]:
    if ref_id is None:
        return None
    target = lookup.get(_as_uuid(ref_id))
    if target is None:
        return dict(unknown)
    return project(target)


def person_projection(user: Users) -> dict:
    return {"id": user.id, "name": user.name}


def unit_projection(unit: UnitWorks) -> dict:
    return {"id": unit.id, "name": unit.name, "image": unit.image or []}


def category_projection(category: Categories) -> dict:
    return {"id": category.id, "name": category.name, "image": category.image}


def officer_report_projection(officer_report: OfficerReports) -> dict:
    return {
        "id": officer_report.id,
        "message": officer_report.message,
        "imageReport": officer_report.image_report or [],
    }


def comment_projection(comment: Comments) -> dict:
    return {
        "id": comment.id,
        "name": comment.name,
        "message": comment.message,
        "createdAt": comment.created_at,
    }


UNKNOWN_PERSON = {"id": None, "name": UNKNOWN_NAME}
UNKNOWN_UNIT = {"id": None, "name": UNKNOWN_NAME, "image": []}
UNKNOWN_CATEGORY = {"id": None, "name": UNKNOWN_NAME, "image": None}
UNKNOWN_OFFICER_REPORT = {"id": None, "message": UNKNOWN_NAME, "imageReport": []}


def enrich_reports(db: Session, reports: List[Reports]) -> List[dict]:
    """Enrich a page of reports with one query per referenced table."""
    users = load_by_ids(
        db, Users,
        [r.reporter_id for r in reports] + [r.officer_id for r in reports],
    )
    units = load_by_ids(db, UnitWorks, [r.unit_work_id for r in reports])
    categories = load_by_ids(db, Categories, [r.category_id for r in reports])
    officer_reports = load_by_ids(db, OfficerReports, [r.officer_report_id for r in reports])
    comments = load_by_ids(db, Comments, [c for r in reports for c in (r.comment or [])])

    results = []
    for report in reports:
        results.append({
            "id": report.id,
            "title": report.title,
            "description": report.description,
            "address": report.address,
            "latitude": report.latitude,
            "longitude": report.longitude,
            "status": report.status,
            "imageReport": report.image_report or [],
            "category": resolve_reference(report.category_id, categories, category_projection, UNKNOWN_CATEGORY),
            "reporter": resolve_reference(report.reporter_id, users, person_projection, UNKNOWN_PERSON),
            "unitWorks": resolve_reference(report.unit_work_id, units, unit_projection, UNKNOWN_UNIT),
            "officer": resolve_reference(report.officer_id, users, person_projection, UNKNOWN_PERSON),
            "officerReport": resolve_reference(
                report.officer_report_id, officer_reports, officer_report_projection, UNKNOWN_OFFICER_REPORT
            ),
            "comment": [
                comment_projection(comments[cid])
                for cid in (_as_uuid(c) for c in (report.comment or []))
                if cid in comments
            ],
            "createdAt": report.created_at,
            "updatedAt": report.updated_at,
        })
    return results


def enrich_report(db: Session, report: Reports) -> dict:
    return enrich_reports(db, [report])[0]
