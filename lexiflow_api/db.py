from sqlmodel import SQLModel, create_engine

from .config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)


def init_db() -> None:
    # Tablo modellerinin metadata'ya kaydı için
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
