# mentor_connect/dependencies/service_dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.connection_service import ConnectionService
from ..services.discovery_service import DiscoveryService
from ..services.profile_service import ProfileService

def get_connection_service(db: Session = Depends(get_db)) -> ConnectionService:
    return ConnectionService(db)

def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)

def get_discovery_service(db: Session = Depends(get_db)) -> DiscoveryService:
    return DiscoveryService(db)
