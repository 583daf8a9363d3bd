import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from ..config import settings
from ..errors import FailedPrecondition, InvalidArgument, PermissionDenied, Unauthenticated
from ..models import DailyRecord
from .clock import as_utc, today
from .store import DocumentStore, Transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardClaim:
    user_id: str
    day_id: str
    extra_word_ids: Tuple[str, ...]
    granted_at: datetime


@dataclass(frozen=True)
class RewardStatus:
    user_id: str
    day_id: str
    reward_claimed: bool
    extra_word_ids: Tuple[str, ...]
    last_rewarded_at: Optional[datetime]
    cooldown_remaining: timedelta


class RewardEngine:
    """
    Ödüllü reklam sonrası günlük ek kelime verme.

    Kullanıcı + gün başına tek seferlik; kayıt okunur, uygunluk denetlenir,
    ortak havuzdan BONUS_WORD_COUNT aday rastgele seçilir ve kayıt aynı
    işlem içinde güncellenir. Yeniden deneme tamamen depoya aittir.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        bonus_count: Optional[int] = None,
        cooldown: Optional[timedelta] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[datetime], str] = today,
    ):
        self.store = store
        self.bonus_count = bonus_count if bonus_count is not None else settings.BONUS_WORD_COUNT
        self.cooldown = cooldown if cooldown is not None else timedelta(hours=settings.BONUS_COOLDOWN_HOURS)
        self.rng = rng or random.SystemRandom()
        self.clock = clock

    def claim_daily_reward(self, caller_id: Optional[str], requested_user_id) -> RewardClaim:
        user_id = self._check_identity(caller_id, requested_user_id)

        def _claim(tx: Transaction) -> RewardClaim:
            day_id = self.clock(tx.now)
            record = self._load_record(tx, user_id, day_id)

            if record.reward_claimed:
                raise FailedPrecondition("Reward already claimed.", reason="already-claimed")

            if self._cooldown_remaining(record, tx.now) > timedelta(0):
                raise FailedPrecondition("Cooldown active.", reason="cooldown-active")

            excluded = set(record.assigned_word_ids or []) | set(record.extra_word_ids or [])
            candidates = [w for w in tx.list_public_word_ids() if w not in excluded]
            if len(candidates) < self.bonus_count:
                raise FailedPrecondition(
                    "Not enough candidate words available for bonus.",
                    reason="insufficient-candidates",
                )

            selected = self.pick_bonus_words(candidates)
            tx.update_daily_record(
                record,
                extra_word_ids=selected,
                reward_claimed=True,
                last_rewarded_at=tx.now,
                updated_at=tx.now,
            )
            return RewardClaim(
                user_id=user_id,
                day_id=day_id,
                extra_word_ids=tuple(selected),
                granted_at=tx.now,
            )

        try:
            claim = self.store.run_transaction(_claim)
        except FailedPrecondition as exc:
            logger.info("Reward rejected for user=%s: %s", user_id, exc.reason)
            raise

        logger.info(
            "Rewarded extra words granted user=%s day=%s words=%s",
            claim.user_id,
            claim.day_id,
            list(claim.extra_word_ids),
        )
        return claim

    def get_reward_status(self, caller_id: Optional[str], requested_user_id) -> RewardStatus:
        user_id = self._check_identity(caller_id, requested_user_id)

        def _status(tx: Transaction) -> RewardStatus:
            day_id = self.clock(tx.now)
            record = self._load_record(tx, user_id, day_id)
            return RewardStatus(
                user_id=user_id,
                day_id=day_id,
                reward_claimed=record.reward_claimed,
                extra_word_ids=tuple(record.extra_word_ids or []),
                last_rewarded_at=as_utc(record.last_rewarded_at) if record.last_rewarded_at else None,
                cooldown_remaining=self._cooldown_remaining(record, tx.now),
            )

        return self.store.run_transaction(_status)

    def pick_bonus_words(self, candidates: List[str]) -> List[str]:
        """
        Adaylardan bonus_count kadar farklı kelimeyi eşit olasılıkla seçer.
        Fisher–Yates karıştırma (random.shuffle) + ilk bonus_count eleman.
        """
        pool = list(candidates)
        self.rng.shuffle(pool)
        return pool[: self.bonus_count]

    def _cooldown_remaining(self, record: DailyRecord, now: datetime) -> timedelta:
        if record.last_rewarded_at is None:
            return timedelta(0)
        elapsed = now - as_utc(record.last_rewarded_at)
        return max(self.cooldown - elapsed, timedelta(0))

    @staticmethod
    def _load_record(tx: Transaction, user_id: str, day_id: str) -> DailyRecord:
        record = tx.get_daily_record(user_id, day_id)
        if record is None:
            raise FailedPrecondition("Daily words not initialized for today.", reason="not-initialized")
        return record

    @staticmethod
    def _check_identity(caller_id: Optional[str], requested_user_id) -> str:
        # Depoya dokunmadan önce; her biri ayrı hata türü
        if not caller_id:
            raise Unauthenticated("Authentication is required.")
        if not isinstance(requested_user_id, str) or not requested_user_id:
            raise InvalidArgument("A valid userId is required.")
        if caller_id != requested_user_id:
            raise PermissionDenied("You can only claim rewards for your own account.")
        return requested_user_id
