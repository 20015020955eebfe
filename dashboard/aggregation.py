from sqlalchemy import func
from sqlalchemy.orm import Session

from reports.models import Reports, ReportStatus, STATUS_VALUES


def status_summary(db: Session) -> dict:
    """Count reports per status. Every status key is present, zero when unused."""
    counts = dict.fromkeys(STATUS_VALUES, 0)
    rows = (
        db.query(Reports.status, func.count(Reports.id).label("total"))
        .group_by(Reports.status)
        .all()
    )
    for status, total in rows:
        if status in counts:
            counts[status] = total
    return counts


def coordinate_summary(db: Session) -> list:
    """Map points for every report that has been acted upon."""
    rows = (
        db.query(Reports.title, Reports.address, Reports.latitude, Reports.longitude)
        .filter(Reports.status != ReportStatus.WAITING.value)
        .order_by(Reports.created_at.desc())
        .all()
    )
    return [
        {
            "title": r.title,
            "address": r.address,
            "latitude": r.latitude,
            "longitude": r.longitude,
        }
        for r in rows
    ]
