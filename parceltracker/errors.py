"""
Exceptions raised by the parcel store.

Lookups that match no row raise SQLAlchemy's own NoResultFound, re-exported
here as ParcelNotFound so callers can catch absence without importing
SQLAlchemy. Other storage errors are SQLAlchemyError subclasses and are
passed through untouched.
"""

from sqlalchemy.exc import NoResultFound

ParcelNotFound = NoResultFound


class ParcelStoreError(Exception):
    """Base exception for parcel store domain errors."""


class StatusGuardError(ParcelStoreError):
    """Raised when a parcel is modified outside the 'registered' status."""

    def __init__(self, number: int, status: str, message: str):
        super().__init__(message)
        self.number = number
        self.status = status
