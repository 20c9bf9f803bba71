# shortlink/core/session.py
"""
Session identity and validity policies.

A SessionIdentity is issued on successful login and carried by the caller
(the HTTP layer signs it into a cookie). Whether an identity is still
acceptable is decided by a SessionPolicy; the Login Manager additionally
requires the referenced user to still exist.
"""
import datetime as dt
from abc import ABC, abstractmethod
from dataclasses import dataclass


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class SessionIdentity:
    name: str  # User.name the session was issued for
    issued_at: dt.datetime  # timezone-aware UTC issue time


class SessionPolicy(ABC):
    """Decides whether a previously issued identity is still acceptable."""

    def issue(self, name: str) -> SessionIdentity:
        return SessionIdentity(name=name, issued_at=utc_now())

    @abstractmethod
    def accepts(self, identity: SessionIdentity, now: dt.datetime | None = None) -> bool:
        ...


class ExistencePolicy(SessionPolicy):
    """No clock: a session lives as long as its user does."""

    def accepts(self, identity: SessionIdentity, now: dt.datetime | None = None) -> bool:
        return bool(identity.name)


class TTLPolicy(SessionPolicy):
    """Sessions expire ``max_age`` after issuance."""

    def __init__(self, max_age: dt.timedelta):
        if max_age <= dt.timedelta(0):
            raise ValueError("max_age must be positive")
        self.max_age = max_age

    def accepts(self, identity: SessionIdentity, now: dt.datetime | None = None) -> bool:
        if not identity.name:
            return False
        now = now or utc_now()
        # Tokens issued in the future are rejected as well
        return identity.issued_at <= now < identity.issued_at + self.max_age


def build_session_policy(max_age_minutes: int) -> SessionPolicy:
    if max_age_minutes > 0:
        return TTLPolicy(dt.timedelta(minutes=max_age_minutes))
    return ExistencePolicy()
