"""
Service layer for flashsets.
Provides focused services for different responsibilities:
- CollectionService: Stores named collections and checks name existence
- NamingServiceClient: Requests generated collection names over HTTP
"""

from flashsets.config import NAMING_SERVICE_TIMEOUT, NAMING_SERVICE_URL
from flashsets.db import Session
from flashsets.services.collection_store import CollectionService, CreateResult
from flashsets.services.naming import NamingServiceClient

# Create service instances with the shared session maker and configuration
collection_service = CollectionService(Session)
naming_client = NamingServiceClient(NAMING_SERVICE_URL, timeout=NAMING_SERVICE_TIMEOUT)

__all__ = [
    # Service instances
    "collection_service",
    "naming_client",
    # Service classes
    "CollectionService",
    "CreateResult",
    "NamingServiceClient",
]
