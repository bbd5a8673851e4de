"""
Schema bootstrap for the remote history store.

``create_all`` creates the ``content_records`` table on the database named by
DATABASE_URL if it is missing. The SQL store calls it on every init; run the
module directly to prepare a database ahead of the first deploy.
"""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers ContentRecord on Base.metadata


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("History tables created successfully.")
    except (SQLAlchemyError, RuntimeError) as exc:
        raise SystemExit(f"Failed to create history tables: {exc}") from exc
