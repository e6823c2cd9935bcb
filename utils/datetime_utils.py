# utils/datetime_utils.py

from datetime import datetime
from typing import Optional, Union

OVERDUE = "Overdue"

def _to_local_naive(dt: datetime) -> datetime:
    # Aware-время переводим в локальное и отбрасываем tzinfo
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt

def parse_local_datetime(value: str) -> datetime:
    """Разбор строки вида YYYY-MM-DDTHH:MM[...] без учета секунд и зоны"""
    date_part, _, time_part = value.partition("T")
    if not time_part:
        date_part, _, time_part = value.partition(" ")
    year, month, day = (int(p) for p in date_part.split("-"))
    hour, minute = (int(p) for p in time_part.split(":")[:2])
    return datetime(year, month, day, hour, minute)

def calculate_remaining(rem_time: Union[str, datetime], now: Optional[datetime] = None) -> str:
    """
    Оставшееся время до дедлайна в виде "1d 2h 3m left" или "Overdue".
    Дни и часы опускаются, если равны нулю, минуты выводятся всегда.
    """
    if isinstance(rem_time, datetime):
        target = _to_local_naive(rem_time)
    else:
        target = parse_local_datetime(rem_time)
    current = _to_local_naive(now) if now is not None else datetime.now()

    diff = (target - current).total_seconds()
    if diff <= 0:
        return OVERDUE

    mins = int(diff // 60) % 60
    hours = int(diff // 3600) % 24
    days = int(diff // 86400)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    parts.append(f"{mins}m")

    return " ".join(parts) + " left"

def get_local_datetime(dt: Optional[datetime] = None) -> str:
    """Формат для поля выбора дедлайна: YYYY-MM-DDTHH:MM"""
    d = dt or datetime.now()
    return d.strftime("%Y-%m-%dT%H:%M")

def parse_rem_time(value: Union[str, datetime]) -> datetime:
    """Разбор remTime с клиента в наивный локальный timestamp"""
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("remTime must be a non-empty date string")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return _to_local_naive(datetime.fromisoformat(raw))
