from taskdesk.models.base import Base, BaseModel, Timestamps
from taskdesk.models.client import Client
from taskdesk.models.history import History

__all__ = [
    "Base",
    "BaseModel",
    "Timestamps",
    "Client",
    "History",
]
