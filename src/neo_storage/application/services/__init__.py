"""Application services for neo-storage."""

from .content_introspector import ContentIntrospector
from .existence_checker import ExistenceChecker
from .path_builder import PathBuilder
from .security_gate import SecurityGate
from .storage_gateway import StorageGateway
from .storage_service import StorageService

__all__ = [
    "ContentIntrospector",
    "ExistenceChecker",
    "PathBuilder",
    "SecurityGate",
    "StorageGateway",
    "StorageService",
]
