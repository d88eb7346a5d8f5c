from typing import Any, Dict

from sqlalchemy import BigInteger, Integer, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from spa_booking.core.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# SQLite only autoincrements INTEGER primary keys.
IdentifierType = BigInteger().with_variant(Integer(), "sqlite")
