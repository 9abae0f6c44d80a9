# mentor_connect/routers/connection_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query

from ..config import get_settings
from ..dependencies.service_dependencies import get_connection_service
from ..models import User
from ..schemas import (
    ConnectionActionResponse, ConnectionCreate, ConnectionResponse, ConnectionStatusUpdate, MessageResponse,
)
from ..security import get_current_user
from ..services import ConnectionService
from ..utils.response_enricher import ResponseEnricher

settings = get_settings()
router = APIRouter(prefix=f"{settings.API_PREFIX}/connections", tags=["connections"])

@router.post("", response_model=ConnectionActionResponse, status_code=201)
async def send_connection_request(
    payload: ConnectionCreate,
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service)
):
    """Send a connection request to another user"""
    connection = connection_service.create_request(current_user.id, payload.recipient_id)
    return {
        "message": "Connection request sent successfully",
        "connection": ResponseEnricher.enrich_single_connection(connection),
    }

@router.get("", response_model=List[ConnectionResponse])
async def get_connections(
    type: Optional[str] = Query(None, description="pending_received, pending_sent, accepted, declined_sent or declined_received"),
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service)
):
    """List the current user's connections of one type"""
    connections = connection_service.list_connections(current_user.id, type)
    return ResponseEnricher.enrich_connections(connections)

@router.put("/{connection_id}", response_model=ConnectionActionResponse)
async def manage_connection_request(
    payload: ConnectionStatusUpdate,
    connection_id: int = Path(..., description="The ID of the connection request"),
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service)
):
    """Accept or decline a received request"""
    connection = connection_service.resolve_request(connection_id, current_user.id, payload.status)
    return {
        "message": f"Request {connection.status} successfully",
        "connection": ResponseEnricher.enrich_single_connection(connection),
    }

@router.delete("/{connection_id}", response_model=MessageResponse)
async def delete_connection(
    connection_id: int = Path(..., description="The ID of the connection to cancel or remove"),
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service)
):
    """Cancel a pending request or remove an accepted connection"""
    message = connection_service.delete_connection(connection_id, current_user.id)
    return MessageResponse(message=message)
