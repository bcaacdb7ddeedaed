# journal_api/infrastructure/database/base_model.py

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase


class BaseModel(DeclarativeBase):
    pass


# BIGINT no PostgreSQL; no SQLite precisa ser INTEGER para virar rowid/autoincrement
BigIntId = BigInteger().with_variant(Integer, "sqlite")
