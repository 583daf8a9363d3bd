from datetime import datetime, timedelta, timezone
from typing import Optional

from ..config import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Saat dilimi bilgisi olmayan (naive) zamanları UTC kabul eder."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def today(now: Optional[datetime] = None, *, utc_offset_hours: Optional[int] = None) -> str:
    """
    Sabit UTC ofsetine (varsayılan Türkiye, UTC+3) göre bugünün gün anahtarı.
    - İstemcinin yerel saatinden bağımsızdır
    - Testlerde `now` verilerek gün sabitlenebilir
    DÖNÜŞ: 'YYYY-MM-DD'
    """
    if now is None:
        now = utc_now()
    if utc_offset_hours is None:
        utc_offset_hours = settings.DAY_UTC_OFFSET_HOURS

    local = as_utc(now).astimezone(timezone(timedelta(hours=utc_offset_hours)))
    return local.strftime("%Y-%m-%d")
