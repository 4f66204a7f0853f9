# budget_manager/api/endpoints/transactions.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from budget_manager import schemas
from budget_manager import crud
from budget_manager.api import deps
from budget_manager.core.config import settings
from budget_manager.db.models.transaction import TransactionType

logger = logging.getLogger(__name__)

router = APIRouter()

async def _ensure_category_exists(db: AsyncSession, category_id: int) -> None:
    # Ссылаться можно и на деактивированную категорию, главное - чтобы строка существовала
    category = await crud.crud_category.get_category(db=db, category_id=category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category does not exist")

# --- Эндпоинты ---

@router.get("", response_model=List[schemas.Transaction])
async def read_transactions(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    month: Optional[str] = Depends(deps.optional_month),
    type_: Optional[TransactionType] = Query(None, alias="type", description="Фильтр по типу (income или expense)"),
    category_id: Optional[int] = Query(None, description="Фильтр по ID категории"),
):
    """
    Список транзакций с именами категорий, новые сверху.
    Без month возвращаются последние TRANSACTIONS_DEFAULT_LIMIT записей.
    """
    filters = {
        "type": type_.value if type_ else None,
        "category_id": category_id,
    }
    try:
        return await crud.crud_transaction.get_transactions(
            db=db,
            month=month,
            filters={k: v for k, v in filters.items() if v is not None},
            limit=None if month else settings.TRANSACTIONS_DEFAULT_LIMIT
        )
    except SQLAlchemyError as e:
        logger.exception("Error reading transactions (month=%s)", month)
        raise deps.store_error(e)


@router.post("", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    *,
    transaction_in: schemas.TransactionCreate,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Создать транзакцию вручную (source по умолчанию manual).
    """
    try:
        await _ensure_category_exists(db, transaction_in.category_id)
        return await crud.crud_transaction.create_transaction(db=db, obj_in=transaction_in)
    except SQLAlchemyError as e:
        logger.exception("Error creating transaction")
        raise deps.store_error(e)


@router.post("/import", response_model=schemas.TransactionImportResult)
async def import_transactions(
    *,
    import_in: schemas.TransactionImportRequest,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Пакетный импорт (например, из CSV).
    Каждая строка проверяется отдельно; некорректные молча пропускаются,
    в ответе - количество реально импортированных строк.
    """
    rows: List[schemas.TransactionImportRow] = []
    for index, raw in enumerate(import_in.transactions):
        if not isinstance(raw, dict):
            logger.debug("Skipping import row %d: not an object", index)
            continue
        try:
            rows.append(schemas.TransactionImportRow.model_validate(raw))
        except ValidationError as ve:
            logger.debug("Skipping import row %d: %s", index, ve.errors())

    try:
        imported = await crud.crud_transaction.import_transactions(db=db, rows=rows)
    except SQLAlchemyError as e:
        logger.exception("Error importing transactions")
        raise deps.store_error(e)

    logger.info("Imported %d of %d transactions", imported, len(import_in.transactions))
    return schemas.TransactionImportResult(
        message=f"{imported} transactions imported successfully",
        imported=imported
    )


@router.put("/{transaction_id:int}", response_model=schemas.Transaction)
async def update_transaction(
    *,
    transaction_id: int,
    transaction_in: schemas.TransactionUpdate,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Обновить транзакцию по ID.
    """
    try:
        db_transaction = await crud.crud_transaction.get_transaction(db=db, transaction_id=transaction_id)
        if not db_transaction:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")

        if transaction_in.category_id != db_transaction.category_id:
            await _ensure_category_exists(db, transaction_in.category_id)

        return await crud.crud_transaction.update_transaction(
            db=db, db_obj=db_transaction, obj_in=transaction_in
        )
    except SQLAlchemyError as e:
        logger.exception("Error updating transaction %s", transaction_id)
        raise deps.store_error(e)


@router.delete("/{transaction_id:int}", response_model=schemas.Message)
async def delete_transaction(
    *,
    transaction_id: int,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Удалить транзакцию по ID.
    """
    try:
        deleted = await crud.crud_transaction.remove_transaction(db=db, transaction_id=transaction_id)
    except SQLAlchemyError as e:
        logger.exception("Error deleting transaction %s", transaction_id)
        raise deps.store_error(e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return schemas.Message(message="Transaction deleted successfully")
