"""
Tests for service.py - parcel lifecycle on top of the store.
"""

import re

import pytest
from sqlalchemy.exc import NoResultFound

from parceltracker.errors import StatusGuardError
from parceltracker.service import created_at_now
from parceltracker.status import ParcelStatus


class TestRegister:
    """Registering new parcels."""

    def test_register_sets_registered_status(self, service, store):
        parcel = service.register(1000, "Psd, Koltsevaya 7")

        assert parcel.number
        stored = store.get(parcel.number)
        assert stored.status == ParcelStatus.REGISTERED.value
        assert stored.address == "Psd, Koltsevaya 7"
        assert stored.client == 1000
        assert stored.created_at == parcel.created_at

    def test_created_at_format(self):
        """Timestamps are RFC 3339 in UTC."""
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", created_at_now())


class TestNextStatus:
    """Status progression registered -> sent -> delivered."""

    def test_walks_through_statuses(self, service, store):
        number = service.register(1000, "address").number

        assert service.next_status(number) == ParcelStatus.SENT.value
        assert store.get(number).status == ParcelStatus.SENT.value

        assert service.next_status(number) == ParcelStatus.DELIVERED.value
        assert store.get(number).status == ParcelStatus.DELIVERED.value

    def test_delivered_stays_delivered(self, service, store):
        number = service.register(1000, "address").number
        store.set_status(number, ParcelStatus.DELIVERED.value)

        assert service.next_status(number) is None
        assert store.get(number).status == ParcelStatus.DELIVERED.value

    def test_unknown_status_is_left_alone(self, service, store):
        number = service.register(1000, "address").number
        store.set_status(number, "returned")

        assert service.next_status(number) is None
        assert store.get(number).status == "returned"

    def test_missing_parcel(self, service):
        with pytest.raises(NoResultFound):
            service.next_status(999_999)


class TestChangeAddressAndDelete:
    """Guarded operations through the service."""

    def test_change_address_while_registered(self, service, store):
        number = service.register(1000, "old").number

        service.change_address(number, "new address")

        assert store.get(number).address == "new address"

    def test_change_address_after_sent(self, service, store):
        number = service.register(1000, "old").number
        service.next_status(number)

        with pytest.raises(StatusGuardError):
            service.change_address(number, "blocked")

        assert store.get(number).address == "old"

    def test_delete_registered(self, service, store):
        number = service.register(1000, "address").number

        service.delete(number)

        with pytest.raises(NoResultFound):
            store.get(number)

    def test_delete_sent_fails(self, service, store):
        number = service.register(1000, "address").number
        service.next_status(number)

        with pytest.raises(StatusGuardError):
            service.delete(number)


class TestClientParcels:
    """Listing a client's parcels."""

    def test_client_parcels(self, service, rng):
        client = rng.randrange(10_000_000)
        registered = {service.register(client, f"address {i}").number for i in range(3)}

        parcels = service.client_parcels(client)

        assert {p.number for p in parcels} == registered
