"""
Belge deposu soyutlaması.

Ödül motoru depoya yalnızca `run_transaction` üzerinden erişir: verilen
oku-doğrula-yaz fonksiyonu bir işlem (transaction) içinde çalıştırılır;
kayıt okunduktan sonra başka bir yazım tarafından değiştirilmişse deneme
geri alınır ve fonksiyon baştan (kaydı yeniden okuyarak) çalıştırılır.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import OperationalError
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ..config import settings
from ..errors import TransientError
from ..models import DailyRecord, PublicWord
from .clock import utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConcurrentModification(Exception):
    """Okunan kaydın versiyonu commit anında değişmiş."""


class Transaction(ABC):
    # Depo tarafından atanan zaman damgası; deneme boyunca sabit
    now: datetime

    @abstractmethod
    def get_daily_record(self, user_id: str, day_id: str) -> Optional[DailyRecord]:
        ...

    @abstractmethod
    def list_public_word_ids(self) -> List[str]:
        ...

    @abstractmethod
    def update_daily_record(self, record: DailyRecord, **fields: Any) -> None:
        """Alan bazlı birleştirme; yazım commit anında, okunan versiyona koşullu uygulanır."""


class DocumentStore(ABC):
    @abstractmethod
    def run_transaction(self, fn: Callable[[Transaction], T]) -> T:
        ...


class _SQLModelTransaction(Transaction):
    def __init__(self, session: Session, now: datetime):
        self._session = session
        self.now = now
        self._writes: List[Tuple[int, int, dict]] = []

    def get_daily_record(self, user_id: str, day_id: str) -> Optional[DailyRecord]:
        record = self._session.exec(
            select(DailyRecord).where(
                DailyRecord.user_id == user_id,
                DailyRecord.day_id == day_id,
            )
        ).first()
        if record is not None:
            # Nesne oturumdan ayrılır; alan değişiklikleri otomatik flush edilmez
            self._session.expunge(record)
        return record

    def list_public_word_ids(self) -> List[str]:
        return list(self._session.exec(select(PublicWord.word_id)).all())

    def update_daily_record(self, record: DailyRecord, **fields: Any) -> None:
        if "version" in fields:
            raise ValueError("version is managed by the store")
        self._writes.append((record.id, record.version, fields))

    def commit(self) -> None:
        for record_id, version, fields in self._writes:
            result = self._session.exec(
                update(DailyRecord)
                .where(DailyRecord.id == record_id, DailyRecord.version == version)
                .values(version=version + 1, **fields)
            )
            if result.rowcount != 1:
                raise ConcurrentModification(f"daily record {record_id} changed since version {version}")
        self._session.commit()


class SQLModelDocumentStore(DocumentStore):
    """
    SQLModel tabanlı depo.
    - Her deneme yeni bir Session içinde çalışır
    - Yazımlar `UPDATE ... WHERE id = :id AND version = :version` ile yapılır
    - Etkilenen satır yoksa ya da veritabanı kilit/serileştirme hatası verirse
      deneme geri alınır ve baştan tekrarlanır
    - max_attempts aşılırsa TransientError
    """

    def __init__(
        self,
        engine: Engine,
        *,
        max_attempts: Optional[int] = None,
        now_fn: Callable[[], datetime] = utc_now,
    ):
        self._engine = engine
        self._max_attempts = max_attempts if max_attempts is not None else settings.TRANSACTION_MAX_ATTEMPTS
        self._now_fn = now_fn

    def run_transaction(self, fn: Callable[[Transaction], T]) -> T:
        for attempt in range(1, self._max_attempts + 1):
            with Session(self._engine) as session:
                tx = _SQLModelTransaction(session, self._now_fn())
                try:
                    result = fn(tx)
                    tx.commit()
                except (ConcurrentModification, OperationalError) as exc:
                    session.rollback()
                    logger.warning(
                        "Transaction contention, retrying (attempt %d/%d): %s",
                        attempt,
                        self._max_attempts,
                        exc,
                    )
                    continue
                except BaseException:
                    session.rollback()
                    raise
                return result

        logger.error("Transaction aborted after %d contended attempts", self._max_attempts)
        raise TransientError("Too much contention on daily record, please retry.", reason="contention")
