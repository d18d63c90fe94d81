__version__ = "0.1.0"

from .database import Parcel, init_database, get_session
from .errors import ParcelNotFound, ParcelStoreError, StatusGuardError
from .service import ParcelService
from .status import ParcelStatus
from .store import ParcelStore

__all__ = [
    "Parcel",
    "ParcelNotFound",
    "ParcelService",
    "ParcelStatus",
    "ParcelStore",
    "ParcelStoreError",
    "StatusGuardError",
    "get_session",
    "init_database",
]
