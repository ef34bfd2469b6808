from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from core.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    # make sure all SQLModel models are imported (models) before querying
    import models  # noqa: F401

    return create_engine(str(settings.SQLALCHEMY_DATABASE_URI), pool_pre_ping=True)
