from taskdesk.repositories.base import BaseRepository, RepositoryError
from taskdesk.repositories.client_repo import ClientRepository
from taskdesk.repositories.history_repo import HistoryRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "ClientRepository",
    "HistoryRepository",
]
