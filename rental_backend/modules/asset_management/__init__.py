"""Asset management: assets, unit subdivision, occupancy status and geocoding.

Routers live in ``routers.py``; this package only exports the models so
that other modules can import them without pulling in the API layer.
"""

from .models import Asset, AssetStatus, AssetType

__all__ = [
    "Asset",
    "AssetStatus",
    "AssetType",
]
