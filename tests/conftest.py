import random
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlmodel import SQLModel, Session, create_engine, select

from lexiflow_api.config import settings
from lexiflow_api.models import DailyRecord, PublicWord
from lexiflow_api.services.reward_engine import RewardEngine
from lexiflow_api.services.store import SQLModelDocumentStore

# 12:00 Türkiye saati
NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
TODAY = "2026-10-19"
POOL = [f"w{i:02d}" for i in range(20)]


def make_token(user_id, expires_in=timedelta(hours=1)):
    """Kimlik servisinin vereceği biçimde HS256 token."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iss": settings.JWT_ISS,
        "aud": settings.JWT_AUD,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")


@pytest.fixture
def db_engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'lexiflow.db'}",
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(db_engine):
    return SQLModelDocumentStore(db_engine, now_fn=lambda: NOW)


@pytest.fixture
def seed(db_engine):
    """Ortak havuzu ve (varsa) kullanıcının günlük kaydını yazar."""

    def _seed(
        pool=POOL,
        user_id="u1",
        assigned=("w00", "w01", "w02", "w03", "w04"),
        extra=(),
        reward_claimed=False,
        last_rewarded_at=None,
        day_id=TODAY,
    ):
        with Session(db_engine) as session:
            for word_id in pool:
                session.add(PublicWord(word_id=word_id))
            if user_id is not None:
                session.add(
                    DailyRecord(
                        user_id=user_id,
                        day_id=day_id,
                        assigned_word_ids=list(assigned),
                        extra_word_ids=list(extra),
                        reward_claimed=reward_claimed,
                        last_rewarded_at=last_rewarded_at,
                        updated_at=NOW,
                    )
                )
            session.commit()

    return _seed


@pytest.fixture
def read_record(db_engine):
    def _read(user_id="u1", day_id=TODAY):
        with Session(db_engine) as session:
            record = session.exec(
                select(DailyRecord).where(
                    DailyRecord.user_id == user_id,
                    DailyRecord.day_id == day_id,
                )
            ).first()
            if record is not None:
                session.expunge(record)
            return record

    return _read


@pytest.fixture
def reward_engine(store):
    return RewardEngine(store, rng=random.Random(1234))
