"""
Parcel Store.

Responsibilities:
- CRUD operations for the parcel table.
- Status guard on address changes and deletion.

Non-Responsibilities:
- No session lifecycle (the caller opens and closes it).
- No retries.
- No status validation.

Known limitation:
The status guard reads the row and then writes in a separate statement.
A concurrent status change between the two is not detected.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import Parcel
from .errors import StatusGuardError
from .logger import StructuredLogger, get_logger
from .status import is_registered


def _snapshot(row: Parcel) -> Parcel:
    """Copy a loaded row into a transient Parcel not tracked by any session."""
    return Parcel(
        number=row.number,
        client=row.client,
        status=row.status,
        address=row.address,
        created_at=row.created_at,
    )


class ParcelStore:
    """Data access for parcel records backed by a SQLAlchemy session."""

    def __init__(self, session: Session, logger: Optional[StructuredLogger] = None):
        self.session = session
        self.logger = logger or get_logger()

    def add(self, parcel: Parcel) -> int:
        """
        Insert a parcel and return the number assigned by the database.

        Any number already set on `parcel` is ignored; the argument itself
        is not attached to the session.
        """
        self.logger.record_operation("add")
        row = Parcel(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        self.session.add(row)
        self._commit("add")

        self.logger.debug("Parcel added", number=row.number, client=row.client)
        return row.number

    def get(self, number: int) -> Parcel:
        """
        Get a parcel by number.

        The result is a detached copy; edits to it are never saved.

        Raises:
            NoResultFound: no parcel has this number
        """
        self.logger.record_operation("get")
        try:
            row = self.session.query(Parcel).filter_by(number=number).one()
        except SQLAlchemyError as e:
            self._failed("get", e, number=number)
            raise
        return _snapshot(row)

    def get_by_client(self, client: int) -> List[Parcel]:
        """Return every parcel of a client, empty list if there are none."""
        self.logger.record_operation("get_by_client")
        try:
            rows = self.session.query(Parcel).filter_by(client=client).all()
        except SQLAlchemyError as e:
            self._failed("get_by_client", e, client=client)
            raise
        return [_snapshot(row) for row in rows]

    def set_status(self, number: int, status: str) -> None:
        """Set the status of a parcel. Unknown numbers are ignored."""
        self.logger.record_operation("set_status")
        try:
            updated = (
                self.session.query(Parcel)
                .filter_by(number=number)
                .update({Parcel.status: status})
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            self._failed("set_status", e, number=number)
            raise
        self._commit("set_status")

        self.logger.debug("Parcel status set", number=number, status=status, rows=updated)

    def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a registered parcel.

        Raises:
            NoResultFound: no parcel has this number
            StatusGuardError: the parcel has left the 'registered' status
        """
        self.logger.record_operation("set_address")
        self._check_registered(
            "set_address",
            number,
            "address can be changed only if status is 'registered'",
        )
        try:
            self.session.query(Parcel).filter_by(number=number).update(
                {Parcel.address: address}
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            self._failed("set_address", e, number=number)
            raise
        self._commit("set_address")

        self.logger.debug("Parcel address set", number=number)

    def delete(self, number: int) -> None:
        """
        Delete a registered parcel.

        Raises:
            NoResultFound: no parcel has this number
            StatusGuardError: the parcel has left the 'registered' status
        """
        self.logger.record_operation("delete")
        self._check_registered(
            "delete",
            number,
            "parcel can be deleted only if status is 'registered'",
        )
        try:
            self.session.query(Parcel).filter_by(number=number).delete()
        except SQLAlchemyError as e:
            self.session.rollback()
            self._failed("delete", e, number=number)
            raise
        self._commit("delete")

        self.logger.debug("Parcel deleted", number=number)

    def _check_registered(self, operation: str, number: int, message: str) -> None:
        try:
            row = self.session.query(Parcel.status).filter_by(number=number).one()
        except SQLAlchemyError as e:
            self._failed(operation, e, number=number)
            raise

        if not is_registered(row.status):
            error = StatusGuardError(number, row.status, message)
            self._failed(operation, error, number=number, status=row.status)
            raise error

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            self._failed(operation, e)
            raise

    def _failed(self, operation: str, error: Exception, **context) -> None:
        self.logger.record_failure(operation, type(error).__name__)
        self.logger.warning(f"{operation} failed: {error}", **context)
