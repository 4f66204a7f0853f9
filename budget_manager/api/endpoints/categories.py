# budget_manager/api/endpoints/categories.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from budget_manager import schemas
from budget_manager import crud
from budget_manager.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[schemas.Category])
async def read_categories(db: AsyncSession = Depends(deps.get_async_db)):
    """
    Список активных категорий, по имени.
    """
    try:
        return await crud.crud_category.get_categories(db=db)
    except SQLAlchemyError as e:
        logger.exception("Error reading categories")
        raise deps.store_error(e)


@router.post("", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    category_in: schemas.CategoryCreate,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Создать категорию. Имя обязательно и уникально.
    """
    try:
        category = await crud.crud_category.create_category(db=db, obj_in=category_in)
        logger.info("Created category %s (%s)", category.id, category.name)
        return category
    except SQLAlchemyError as e:
        logger.exception("Error creating category %r", category_in.name)
        raise deps.store_error(e)


@router.put("/{category_id:int}", response_model=schemas.Category)
async def update_category(
    *,
    category_id: int,
    category_in: schemas.CategoryUpdate,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Переименовать категорию.
    """
    try:
        db_category = await crud.crud_category.get_category(db=db, category_id=category_id)
        if not db_category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
        return await crud.crud_category.update_category(db=db, db_obj=db_category, obj_in=category_in)
    except SQLAlchemyError as e:
        logger.exception("Error updating category %s", category_id)
        raise deps.store_error(e)


@router.delete("/{category_id:int}", response_model=schemas.Message)
async def delete_category(
    *,
    category_id: int,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Деактивировать категорию (мягкое удаление).
    Исторические транзакции и бюджеты остаются нетронутыми.
    """
    try:
        category = await crud.crud_category.deactivate_category(db=db, category_id=category_id)
    except SQLAlchemyError as e:
        logger.exception("Error deactivating category %s", category_id)
        raise deps.store_error(e)

    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    logger.info("Deactivated category %s (%s)", category.id, category.name)
    return schemas.Message(message="Category deactivated successfully")
