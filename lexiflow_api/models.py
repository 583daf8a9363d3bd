from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DailyRecord(SQLModel, table=True):
    """
    Kullanıcının günlük kelime kaydı:
    - Aynı user_id + day_id için tek satır
    - assigned_word_ids günlük başlangıçta (bu servis dışında) yazılır
    - extra_word_ids ödüllü reklam sonrası bir kez doldurulur
    - version: iyimser eşzamanlılık sayacı, her yazımda artar
    """
    __tablename__ = "daily_words"
    __table_args__ = (UniqueConstraint("user_id", "day_id", name="uq_daily_words_user_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    day_id: str = Field(index=True)  # YYYY-MM-DD
    assigned_word_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    extra_word_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    reward_claimed: bool = False
    last_rewarded_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=_utcnow)
    version: int = 1


class PublicWord(SQLModel, table=True):
    """Tüm kullanıcılara açık ortak kelime havuzu (bu servis için salt okunur)."""
    __tablename__ = "public_words"

    word_id: str = Field(primary_key=True)
    term: Optional[str] = None
