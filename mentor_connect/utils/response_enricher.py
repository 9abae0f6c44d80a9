# mentor_connect/utils/response_enricher.py
from typing import Dict, Any, List
from ..models import Connection
from ..schemas import ConnectionResponse

class ResponseEnricher:
    @staticmethod
    def enrich_connections(connections: List[Connection]) -> List[Dict[str, Any]]:
        """Serializes connections with both participants' public profiles"""
        return [
            ConnectionResponse.model_validate(connection).model_dump(mode="json")
            for connection in connections
        ]

    @staticmethod
    def enrich_single_connection(connection: Connection) -> Dict[str, Any]:
        """Serializes a single connection"""
        return ResponseEnricher.enrich_connections([connection])[0]
