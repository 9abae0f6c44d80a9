from .connection_service import ConnectionService
from .discovery_service import DiscoveryService
from .profile_service import ProfileService

__all__ = ["ConnectionService", "DiscoveryService", "ProfileService"]
