import logging
from datetime import datetime
from io import BytesIO

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from sqlalchemy.orm import Session

from auth.auth import get_current_admin
from auth.database import get_db
from auth.models import Users
from common.responses import success
from reports.enrichment import enrich_reports
from reports.models import Reports
from .aggregation import status_summary, coordinate_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "id", "title", "status", "description", "address", "latitude", "longitude",
    "category", "reporter", "unit_work", "officer", "officer_message",
    "images", "comments", "created_at",
]


@router.get("/summary")
def get_summary(db: Session = Depends(get_db)):
    return success(status_summary(db))


@router.get("/coordinates")
def get_coordinates(db: Session = Depends(get_db)):
    return success(coordinate_summary(db))


def build_reports_workbook(rows: list) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Laporan"
    ws.append(EXPORT_HEADERS)

    for r in rows:
        ws.append([
            str(r["id"]),
            r["title"],
            r["status"],
            r["description"],
            r["address"],
            r["latitude"],
            r["longitude"],
            r["category"]["name"] if r["category"] else None,
            r["reporter"]["name"] if r["reporter"] else None,
            r["unitWorks"]["name"] if r["unitWorks"] else None,
            r["officer"]["name"] if r["officer"] else None,
            r["officerReport"]["message"] if r["officerReport"] else None,
            ", ".join(r["imageReport"]),
            len(r["comment"]),
            r["createdAt"],
        ])
    return wb


@router.get("/export")
def export_reports_excel(
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_admin),
):
    reports = db.query(Reports).order_by(Reports.created_at.desc()).all()
    wb = build_reports_workbook(enrich_reports(db, reports))

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    filename = f"laporan_{datetime.utcnow():%Y%m%d_%H%M%S}.xlsx"
    logger.info(f"GET /dashboard/export - {len(reports)} reports exported by {current_user.email}")
    return StreamingResponse(
        buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
