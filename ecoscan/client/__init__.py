"""EcoScan client: backend API wrapper, local cache and session."""

from ecoscan.client.api import ApiError, EcoScanClient
from ecoscan.client.local_store import LocalBookkeepingStore
from ecoscan.client.session import EcoScanSession

__all__ = ["ApiError", "EcoScanClient", "EcoScanSession", "LocalBookkeepingStore"]
