# budget_manager/crud/crud_transaction.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload
from sqlalchemy import desc, and_
from typing import Optional, List, Union, Dict, Any, Iterable

from budget_manager.core.months import month_bounds
from budget_manager.db.models.category import Category as CategoryModel
from budget_manager.db.models.transaction import Transaction as TransactionModel, TransactionType
from budget_manager.schemas.transaction import TransactionCreate, TransactionUpdate, TransactionImportRow

logger = logging.getLogger(__name__)

def _with_category_name(db_obj: TransactionModel) -> TransactionModel:
    # Для схемы ответа Transaction нужно поле category_name
    db_obj.category_name = db_obj.category.name if db_obj.category else None
    return db_obj

# --- Read Operations ---

async def get_transaction(db: AsyncSession, transaction_id: int) -> Optional[TransactionModel]:
    """
    Получить транзакцию по ее ID вместе с категорией.
    """
    result = await db.execute(
        select(TransactionModel)
        .options(joinedload(TransactionModel.category)) # Загружаем категорию сразу
        .filter(TransactionModel.id == transaction_id)
    )
    db_obj = result.scalar_one_or_none()
    return _with_category_name(db_obj) if db_obj else None

async def get_transactions(
    db: AsyncSession,
    *,
    month: Optional[str] = None,
    filters: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None
) -> List[TransactionModel]:
    """
    Список транзакций, новые сверху.
    month (YYYY-MM) ограничивает выборку календарным месяцем;
    filters поддерживает "type" и "category_id".
    """
    query = select(TransactionModel).options(joinedload(TransactionModel.category))

    conditions = []
    if month:
        start, end = month_bounds(month)
        # Диапазон вместо strftime, чтобы работал индекс по дате
        conditions.append(TransactionModel.date >= start)
        conditions.append(TransactionModel.date < end)

    filters = filters or {}
    if filters.get("type"):
        conditions.append(TransactionModel.type == TransactionType(filters["type"]))
    if filters.get("category_id"):
        conditions.append(TransactionModel.category_id == filters["category_id"])

    if conditions:
        query = query.filter(and_(*conditions))

    query = query.order_by(desc(TransactionModel.date), desc(TransactionModel.id))
    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    return [_with_category_name(t) for t in result.scalars().all()]

# --- Create Operation ---

async def create_transaction(
    db: AsyncSession,
    *,
    obj_in: Union[TransactionCreate, TransactionImportRow]
) -> TransactionModel:
    """
    Создать транзакцию. Каждая вставка коммитится отдельно.
    """
    db_obj = TransactionModel(
        date=obj_in.date,
        description=obj_in.description,
        amount=obj_in.amount,
        type=obj_in.type,
        category_id=obj_in.category_id,
        source=obj_in.source
    )
    db.add(db_obj)
    await db.commit()
    # Загружаем сгенерированные поля и категорию, чтобы вернуть полный объект
    await db.refresh(db_obj, attribute_names=["id", "created_at", "category"])
    return _with_category_name(db_obj)

async def import_transactions(db: AsyncSession, *, rows: Iterable[TransactionImportRow]) -> int:
    """
    Пакетный импорт уже провалидированных строк.
    Строки со ссылкой на несуществующую категорию пропускаются.
    Вставка и коммит построчно: ошибка на середине оставляет предыдущие строки в БД.
    Возвращает количество импортированных строк.
    """
    known_ids_res = await db.execute(select(CategoryModel.id))
    known_category_ids = set(known_ids_res.scalars().all())

    imported = 0
    for row in rows:
        if row.category_id not in known_category_ids:
            logger.debug("Skipping import row with unknown category %s", row.category_id)
            continue
        await create_transaction(db, obj_in=row)
        imported += 1
    return imported

# --- Update Operation ---

async def update_transaction(
    db: AsyncSession,
    *,
    db_obj: TransactionModel,
    obj_in: Union[TransactionUpdate, Dict[str, Any]]
) -> TransactionModel:
    """
    Обновить транзакцию на месте (date, description, amount, type, category_id).
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
    # Категория могла смениться - перезагружаем связь
    await db.refresh(db_obj, attribute_names=["category"])
    return _with_category_name(db_obj)

# --- Delete Operation ---

async def remove_transaction(db: AsyncSession, *, transaction_id: int) -> Optional[TransactionModel]:
    """
    Удалить транзакцию по ID (физически).
    """
    db_obj = await get_transaction(db, transaction_id=transaction_id)
    if not db_obj:
        return None

    await db.delete(db_obj)
    await db.commit()
    return db_obj
