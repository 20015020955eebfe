import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.auth import get_current_user
from auth.database import get_db
from auth.models import Users
from common.responses import success
from reports.service import add_comment
from .schemas import CommentCreateSchema

router = APIRouter(prefix="/comments", tags=["comments"])
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreateSchema,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    comment = add_comment(db, payload.id_report, payload.message, current_user)
    logger.info(f"POST /comments - comment {comment.id} on report {payload.id_report}")
    return success({"idComment": comment.id}, code=201, message="Comment added")
