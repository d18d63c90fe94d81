"""
Parcel service.

Application-level operations on top of ParcelStore: registering new
parcels, walking them through their statuses, and logging what happened.
"""

from datetime import datetime, timezone
from typing import List, Optional

from .database import Parcel
from .logger import StructuredLogger, get_logger
from .status import NEXT_STATUS, ParcelStatus
from .store import ParcelStore


def created_at_now() -> str:
    """Current UTC time as an RFC 3339 string with second precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ParcelService:
    def __init__(self, store: ParcelStore, logger: Optional[StructuredLogger] = None):
        self.store = store
        self.logger = logger or get_logger()

    def register(self, client: int, address: str) -> Parcel:
        """
        Register a new parcel for a client.

        Returns:
            Parcel with the number assigned by the store
        """
        parcel = Parcel(
            client=client,
            status=ParcelStatus.REGISTERED.value,
            address=address,
            created_at=created_at_now(),
        )
        parcel.number = self.store.add(parcel)

        self.logger.info(
            f"Parcel #{parcel.number} registered",
            client=client,
            address=address,
            created_at=parcel.created_at,
        )
        return parcel

    def client_parcels(self, client: int) -> List[Parcel]:
        parcels = self.store.get_by_client(client)

        self.logger.info(f"Client {client} has {len(parcels)} parcels")
        for parcel in parcels:
            self.logger.debug(
                f"Parcel #{parcel.number}",
                address=parcel.address,
                status=parcel.status,
                created_at=parcel.created_at,
            )
        return parcels

    def next_status(self, number: int) -> Optional[str]:
        """
        Move a parcel one step along registered -> sent -> delivered.

        Returns:
            The new status, or None when the parcel cannot move further
        """
        parcel = self.store.get(number)
        new_status = NEXT_STATUS.get(parcel.status)
        if new_status is None:
            self.logger.info(f"Parcel #{number} stays '{parcel.status}'")
            return None

        self.store.set_status(number, new_status)
        self.logger.info(f"Parcel #{number} status changed to '{new_status}'")
        return new_status

    def change_address(self, number: int, address: str) -> None:
        self.store.set_address(number, address)
        self.logger.info(f"Parcel #{number} address changed", address=address)

    def delete(self, number: int) -> None:
        self.store.delete(number)
        self.logger.info(f"Parcel #{number} deleted")
