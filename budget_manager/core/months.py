# budget_manager/core/months.py
# Работа с ключами месяцев в формате YYYY-MM
import re
from datetime import date
from typing import Optional, Tuple, List

MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_KEY_RE = re.compile(MONTH_KEY_PATTERN)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def is_month_key(value: Optional[str]) -> bool:
    return bool(value) and bool(_MONTH_KEY_RE.match(value))


def parse_month_key(month: str) -> Tuple[int, int]:
    """Возвращает (год, месяц) или бросает ValueError для некорректного ключа."""
    if not is_month_key(month):
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")
    year, month_num = month.split("-")
    return int(year), int(month_num)


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_of(day: date) -> str:
    return month_key(day.year, day.month)


def current_month(today: Optional[date] = None) -> str:
    return month_of(today or date.today())


def month_bounds(month: str) -> Tuple[date, date]:
    """
    Границы месяца: (первый день, первый день следующего месяца).
    Правая граница не включается, так удобнее фильтровать по диапазону дат.
    """
    year, month_num = parse_month_key(month)
    start = date(year, month_num, 1)
    end = date(year + 1, 1, 1) if month_num == 12 else date(year, month_num + 1, 1)
    return start, end


def shift_month(month: str, offset: int) -> str:
    """Сдвигает ключ месяца на offset месяцев (отрицательный offset - назад)."""
    year, month_num = parse_month_key(month)
    index = year * 12 + (month_num - 1) + offset
    return month_key(index // 12, index % 12 + 1)


def recent_months(count: int = 12, start: Optional[str] = None) -> List[str]:
    """Последние count месяцев, начиная с текущего (или start) и назад."""
    first = start or current_month()
    return [shift_month(first, -i) for i in range(count)]


def format_month(month: str) -> str:
    """'2024-03' -> 'March 2024'"""
    year, month_num = parse_month_key(month)
    return f"{MONTH_NAMES[month_num - 1]} {year}"
