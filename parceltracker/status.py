"""
Parcel status values.

Status flow:
    registered -> sent -> delivered

The store keeps status as a plain string and does not reject values
outside this set.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """Known parcel statuses."""

    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"


# Transitions applied by ParcelService.next_status
NEXT_STATUS = {
    ParcelStatus.REGISTERED.value: ParcelStatus.SENT.value,
    ParcelStatus.SENT.value: ParcelStatus.DELIVERED.value,
}


def is_registered(status: str) -> bool:
    """Address changes and deletion are only allowed in this state."""
    return status == ParcelStatus.REGISTERED.value
