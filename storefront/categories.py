from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List

from .database import get_db
from .models import Category, Product
from .schemas import CategoryCreate, Category as CategorySchema
from .exceptions import ConflictError, ResourceNotFoundError
from .logging_config import audit_log, error_log

category_router = APIRouter()

def get_category_or_404(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise ResourceNotFoundError("Category", category_id)
    return category

@category_router.post("", response_model=CategorySchema, status_code=201)
async def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db)
):
    category = Category(name=payload.name.strip(), description=payload.description)
    try:
        db.add(category)
        db.commit()
        db.refresh(category)
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Category '{payload.name}' already exists")
    except Exception as e:
        db.rollback()
        error_log(e, {"context": "create_category", "name": payload.name})
        raise HTTPException(status_code=500, detail=f"Error creating category: {str(e)}")

    audit_log(action="category_created", category_id=category.id, name=category.name)
    return category

@category_router.get("", response_model=List[CategorySchema])
async def get_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name).all()

@category_router.get("/{category_id}", response_model=CategorySchema)
async def get_category(category_id: int, db: Session = Depends(get_db)):
    return get_category_or_404(db, category_id)

@category_router.delete("/{category_id}")
async def delete_category(category_id: int, db: Session = Depends(get_db)):
    category = get_category_or_404(db, category_id)

    in_use = db.query(Product.id).filter(Product.category_id == category_id).first()
    if in_use:
        raise ConflictError("Category still has products")

    db.delete(category)
    db.commit()
    audit_log(action="category_deleted", category_id=category_id)
    return {"message": "Category deleted successfully"}
