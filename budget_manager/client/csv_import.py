# budget_manager/client/csv_import.py
"""
Импорт транзакций из CSV на стороне клиента.

Разбор намеренно простой: строки по переводу строки, ячейки по запятой,
без поддержки кавычек и экранирования. Пользователь сопоставляет три колонки
(дата, описание, сумма) и выбирает тип и категорию для всех строк сразу.
"""
import logging
import math
import re
from dataclasses import dataclass
import datetime as dt
from pathlib import Path
from typing import Dict, List, Optional, Union

from dateutil import parser as date_parser

from budget_manager.db.models.transaction import TransactionType, TransactionSource

logger = logging.getLogger(__name__)

CsvRow = Dict[str, Optional[str]]

# Символы валют и разделители тысяч, которые срезаются перед разбором суммы
_AMOUNT_NOISE_RE = re.compile(r"[\s$€£¥₽,]")
# Ведущее число, хвост вида " USD" отбрасывается
_AMOUNT_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

PREVIEW_ROWS = 5


@dataclass
class CsvMapping:
    date_column: str
    description_column: str
    amount_column: str
    default_type: TransactionType
    default_category_id: int


def parse_csv(text: str) -> List[CsvRow]:
    """
    Разбирает CSV текст в список словарей по заголовкам первой строки.
    Недостающие ячейки получают значение None.
    """
    lines = text.strip().split("\n")
    if not lines or not lines[0].strip():
        return []

    headers = [h.strip() for h in lines[0].split(",")]
    rows: List[CsvRow] = []
    for line in lines[1:]:
        values = [v.strip() for v in line.split(",")]
        rows.append({
            header: values[index] if index < len(values) else None
            for index, header in enumerate(headers)
        })
    return rows


def read_csv_file(path: Union[str, Path]) -> List[CsvRow]:
    # utf-8-sig: выгрузки банков часто начинаются с BOM
    return parse_csv(Path(path).read_text(encoding="utf-8-sig"))


def column_names(rows: List[CsvRow]) -> List[str]:
    return list(rows[0].keys()) if rows else []


def preview(rows: List[CsvRow], limit: int = PREVIEW_ROWS) -> List[CsvRow]:
    return rows[:limit]


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    Приводит дату к YYYY-MM-DD. Если разобрать не удалось - возвращает исходную строку.
    Недостающие день и месяц считаются первыми: '2024-03' -> '2024-03-01'.
    """
    if not raw:
        return raw
    default = dt.datetime(dt.date.today().year, 1, 1)
    try:
        return date_parser.parse(raw, default=default).date().isoformat()
    except (ValueError, OverflowError):
        return raw


def normalize_amount(raw: Optional[str]) -> Optional[float]:
    """
    '$1,200.50' -> 1200.5, '-45.00' -> 45.0, '12.50 USD' -> 12.5.
    Знак отбрасывается: тип операции задает пользователь, а не знак суммы.
    None, если сумма не числовая.
    """
    if raw is None:
        return None
    match = _AMOUNT_NUMBER_RE.match(_AMOUNT_NOISE_RE.sub("", raw))
    if not match:
        return None
    value = float(match.group())
    if math.isnan(value) or math.isinf(value):
        return None
    return abs(value)


def map_rows(rows: List[CsvRow], mapping: CsvMapping) -> List[dict]:
    """
    Превращает разобранные строки в тела для POST /api/transactions/import.
    Строки без даты, без описания или с нечисловой суммой отбрасываются.
    """
    transactions = []
    for row in rows:
        date = normalize_date(row.get(mapping.date_column))
        description = row.get(mapping.description_column)
        amount = normalize_amount(row.get(mapping.amount_column))

        if not date or not description or amount is None:
            logger.debug("Dropping CSV row %r", row)
            continue

        transactions.append({
            "date": date,
            "description": description,
            "amount": amount,
            "type": TransactionType(mapping.default_type).value,
            "category_id": mapping.default_category_id,
            "source": TransactionSource.csv.value,
        })
    return transactions
