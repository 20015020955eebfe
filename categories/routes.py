import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.auth import get_current_admin, parse_uuid
from auth.database import get_db
from auth.models import Users
from common.errors import NotFound
from common.responses import success
from .models import Categories
from .schemas import CategoryCreate, CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_admin),
):
    category = Categories(name=payload.name, image=payload.image)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info(f"POST /categories - category {category.id} created by {current_user.email}")
    return success(CategoryResponse.model_validate(category).model_dump(), code=201)


@router.get("/list")
def list_categories(db: Session = Depends(get_db)):
    categories = db.query(Categories).order_by(Categories.created_at.desc()).all()
    return success([CategoryResponse.model_validate(c).model_dump() for c in categories])


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_admin),
):
    category = db.query(Categories).filter(Categories.id == parse_uuid(category_id, "Category")).first()
    if not category:
        raise NotFound("Category not found")

    # reports keep the id; enrichment renders it as "Unknown"
    db.delete(category)
    db.commit()
    logger.info(f"DELETE /categories/{category_id} - deleted by {current_user.email}")
    return success(None, message="Category deleted successfully")
