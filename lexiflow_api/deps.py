from fastapi import Depends

from .db import engine
from .services.reward_engine import RewardEngine
from .services.store import DocumentStore, SQLModelDocumentStore

# Süreç başında bir kez kurulur
_store = SQLModelDocumentStore(engine)


def get_store() -> DocumentStore:
    return _store


def get_reward_engine(store: DocumentStore = Depends(get_store)) -> RewardEngine:
    return RewardEngine(store)
