"""Persistence layer for the display preference of each visitor.

The page remembers a single setting, light or dark mode, per anonymous
session token. It defaults to SQLite for local development, but accepts any
SQLAlchemy-compatible URL (e.g. PostgreSQL/MySQL) so several web workers can
share the preference.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class UserPreferenceModel(Base):
    __tablename__ = "user_preferences"

    user_token = Column(String(64), primary_key=True)
    dark_mode = Column(Boolean, default=False, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class PreferenceStore:
    """Database-backed theme preference store."""

    def __init__(self, url: str) -> None:
        self._engine = create_engine(url, future=True)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False, future=True)

    def get_dark_mode(self, user_token: str) -> bool:
        if not user_token:
            return False
        with self._session_factory() as session:
            row = session.get(UserPreferenceModel, user_token)
            return bool(row and row.dark_mode)

    def set_dark_mode(self, user_token: str, dark_mode: bool) -> None:
        if not user_token:
            return
        with self._session_factory() as session:
            row = session.get(UserPreferenceModel, user_token)
            if row is None:
                row = UserPreferenceModel(user_token=user_token, dark_mode=dark_mode)
                session.add(row)
            else:
                row.dark_mode = dark_mode
            session.commit()
        logger.debug("Stored theme %s for %s", "dark" if dark_mode else "light", user_token)

    def toggle_dark_mode(self, user_token: str) -> bool:
        """Flip the stored theme and return the new value."""
        dark_mode = not self.get_dark_mode(user_token)
        self.set_dark_mode(user_token, dark_mode)
        return dark_mode


def create_store_from_env(url: str | None) -> PreferenceStore:
    return PreferenceStore(url or "sqlite:///preference_data.sqlite3")
