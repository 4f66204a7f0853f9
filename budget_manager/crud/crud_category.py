# budget_manager/crud/crud_category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List, Union

from budget_manager.db.models.category import Category as CategoryModel
from budget_manager.schemas.category import CategoryCreate, CategoryUpdate

# --- Read Operations ---

async def get_category(db: AsyncSession, category_id: int) -> Optional[CategoryModel]:
    """
    Получить категорию по ее ID (активную или деактивированную).
    """
    result = await db.execute(select(CategoryModel).filter(CategoryModel.id == category_id))
    return result.scalar_one_or_none()

async def get_categories(db: AsyncSession, *, include_inactive: bool = False) -> List[CategoryModel]:
    """
    Список категорий, отсортированный по имени.
    По умолчанию только активные - деактивированные не показываются в списках.
    """
    stmt = select(CategoryModel)
    if not include_inactive:
        stmt = stmt.filter(CategoryModel.is_active.is_(True))
    result = await db.execute(stmt.order_by(CategoryModel.name))
    return list(result.scalars().all())

# --- Create Operation ---

async def create_category(db: AsyncSession, *, obj_in: CategoryCreate) -> CategoryModel:
    """
    Создать новую категорию. Имя уникально - дубликат упадет на ограничении БД.
    """
    db_obj = CategoryModel(name=obj_in.name, is_active=True)
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj) # Подтягиваем id и created_at, сгенерированные БД
    return db_obj

# --- Update Operation ---

async def update_category(
    db: AsyncSession,
    *,
    db_obj: CategoryModel,
    obj_in: Union[CategoryUpdate, dict]
) -> CategoryModel:
    """
    Переименовать категорию.
    """
    if isinstance(obj_in, dict):
        update_data = obj_in
    else:
        update_data = obj_in.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        if hasattr(db_obj, field):
            setattr(db_obj, field, value)

    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj

# --- Delete Operation (мягкое удаление) ---

async def deactivate_category(db: AsyncSession, *, category_id: int) -> Optional[CategoryModel]:
    """
    "Удалить" категорию: только помечаем is_active = False.
    Строка остается, транзакции и бюджеты продолжают на нее ссылаться.
    """
    db_obj = await get_category(db, category_id=category_id)
    if not db_obj:
        return None

    db_obj.is_active = False
    db.add(db_obj)
    await db.commit()
    return db_obj
