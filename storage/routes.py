from fastapi import APIRouter, Depends, File, UploadFile, status

from auth.auth import get_current_user
from auth.models import Users
from common.responses import success
from . import supabase_storage

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/image", status_code=status.HTTP_201_CREATED)
def upload_report_image(
    file: UploadFile = File(...),
    current_user: Users = Depends(get_current_user),
):
    url = supabase_storage.upload_image(file, folder=str(current_user.id))
    return success({"url": url}, code=201)
