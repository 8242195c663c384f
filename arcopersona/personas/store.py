"""
Persona Store

Reads and writes the persisted persona records.

Every quiz completion writes two independent records:
    - canonical: arco_persona, 90 days, six-tag taxonomy
    - legacy: arco-brew-style, 30 days, five legacy slugs

The records are never reconciled, so after the legacy record lapses only
the canonical one remains. Storage failures never escape the store:
persist() becomes a no-op and read() reports an unknown visitor.

Callers inject the backend: CookieStorage for browser requests,
DatabaseStorage for visitors with a server-side id, MemoryStorage for
scripts and tests.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Union
from urllib.parse import quote, unquote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from arcopersona.config import settings
from arcopersona.db.schema import StoredPersonaRecord
from .taxonomy import (
    PersonaTag,
    LegacyStyle,
    coerce_persona,
    coerce_legacy_style,
    legacy_style_for,
)

logger = logging.getLogger(__name__)


class StorageUnavailableError(RuntimeError):
    """The persona storage backend cannot be read or written."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RecordPolicy:
    """Name and retention of one persisted record."""
    key: str
    retention: timedelta


@dataclass(frozen=True)
class PersonaRecord:
    """A persisted record as seen by the store."""
    key: str
    value: str  # Percent-encoded
    written_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None  # None when the client enforces expiry

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now


class MemoryStorage:
    """
    Process-local storage backend.

    Set ``available = False`` to simulate storage being inaccessible.
    """

    def __init__(self):
        self.records: Dict[str, PersonaRecord] = {}
        self.available = True

    def _check(self):
        if not self.available:
            raise StorageUnavailableError("memory storage marked unavailable")

    def read(self, key: str) -> Optional[PersonaRecord]:
        self._check()
        return self.records.get(key)

    def write(self, record: PersonaRecord) -> None:
        self._check()
        self.records[record.key] = record

    def delete(self, key: str) -> None:
        self._check()
        self.records.pop(key, None)


class CookieStorage:
    """
    Cookie backend for FastAPI/Starlette requests.

    Reads come from the incoming request, writes go onto the outgoing
    response. Cookies are root-scoped and SameSite=Lax; the browser drops
    them once max-age elapses, so reads carry no expiry.
    """

    def __init__(self, request=None, response=None,
                 path: str = None, samesite: str = None):
        self.request = request
        self.response = response
        self.path = path or settings.cookie_path
        self.samesite = samesite or settings.cookie_samesite

    def read(self, key: str) -> Optional[PersonaRecord]:
        if self.request is None:
            raise StorageUnavailableError("no request to read cookies from")
        value = self.request.cookies.get(key)
        if value is None:
            return None
        return PersonaRecord(key=key, value=value)

    def write(self, record: PersonaRecord) -> None:
        if self.response is None:
            raise StorageUnavailableError("no response to write cookies to")
        max_age = int((record.expires_at - record.written_at).total_seconds())
        self.response.set_cookie(
            key=record.key,
            value=record.value,
            max_age=max_age,
            path=self.path,
            samesite=self.samesite,
        )

    def delete(self, key: str) -> None:
        if self.response is None:
            raise StorageUnavailableError("no response to write cookies to")
        self.response.delete_cookie(key=key, path=self.path, samesite=self.samesite)


class DatabaseStorage:
    """Server-side backend: one persona_records row per (visitor, key)."""

    def __init__(self, session: Session, visitor_id: str):
        self.session = session
        self.visitor_id = visitor_id

    def read(self, key: str) -> Optional[PersonaRecord]:
        try:
            row = self.session.get(StoredPersonaRecord, (self.visitor_id, key))
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(str(exc)) from exc
        if row is None:
            return None
        return PersonaRecord(
            key=row.key,
            value=row.value,
            written_at=_as_utc(row.written_at),
            expires_at=_as_utc(row.expires_at),
        )

    def write(self, record: PersonaRecord) -> None:
        try:
            self.session.merge(StoredPersonaRecord(
                visitor_id=self.visitor_id,
                key=record.key,
                value=record.value,
                written_at=record.written_at,
                expires_at=record.expires_at,
            ))
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageUnavailableError(str(exc)) from exc

    def delete(self, key: str) -> None:
        try:
            row = self.session.get(StoredPersonaRecord, (self.visitor_id, key))
            if row is not None:
                self.session.delete(row)
                self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageUnavailableError(str(exc)) from exc


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def canonical_policy() -> RecordPolicy:
    return RecordPolicy(settings.canonical_cookie_name, timedelta(days=settings.canonical_retention_days))


def legacy_policy() -> RecordPolicy:
    return RecordPolicy(settings.legacy_cookie_name, timedelta(days=settings.legacy_retention_days))


class PersonaStore:
    """
    Persona persistence over an explicit storage backend.

    Args:
        backend: Object with read(key), write(record) and delete(key)
        canonical: Canonical record policy (defaults from settings)
        legacy: Legacy record policy (defaults from settings)
        clock: Returns the current aware datetime
    """

    def __init__(self, backend, canonical: RecordPolicy = None, legacy: RecordPolicy = None,
                 clock: Callable[[], datetime] = utc_now):
        self.backend = backend
        self.canonical = canonical or canonical_policy()
        self.legacy = legacy or legacy_policy()
        self.clock = clock

    def persist(self, tag: Union[PersonaTag, str]) -> None:
        """
        Write the canonical and legacy records for a persona.

        Raises:
            ValueError: If tag is not a declared persona
        """
        persona = coerce_persona(tag)
        if persona is None:
            raise ValueError(f"Unknown persona tag: {tag!r}")

        now = self.clock()
        try:
            self.backend.write(self._record(self.canonical, persona.value, now))
            self.backend.write(self._record(self.legacy, legacy_style_for(persona).value, now))
        except StorageUnavailableError as exc:
            logger.warning("Persona not persisted, storage unavailable: %s", exc)
            return

        logger.debug("Persisted persona %s", persona.value)

    def read(self) -> Optional[PersonaTag]:
        """Canonical persona, or None for an unknown visitor."""
        return coerce_persona(self._read_value(self.canonical.key))

    def read_legacy(self) -> Optional[LegacyStyle]:
        """Legacy brew style, or None once lapsed or never written."""
        return coerce_legacy_style(self._read_value(self.legacy.key))

    def clear(self) -> None:
        """Forget both records."""
        try:
            self.backend.delete(self.canonical.key)
            self.backend.delete(self.legacy.key)
        except StorageUnavailableError as exc:
            logger.warning("Persona not cleared, storage unavailable: %s", exc)

    def _record(self, policy: RecordPolicy, value: str, now: datetime) -> PersonaRecord:
        return PersonaRecord(
            key=policy.key,
            value=quote(value, safe=''),
            written_at=now,
            expires_at=now + policy.retention,
        )

    def _read_value(self, key: str) -> Optional[str]:
        try:
            record = self.backend.read(key)
        except StorageUnavailableError as exc:
            logger.warning("Persona unreadable, storage unavailable: %s", exc)
            return None

        if record is None or record.is_expired(self.clock()):
            return None
        return unquote(record.value)
