from __future__ import annotations

from abc import ABC, abstractmethod

from domain.schemas import AppData


class StoreError(RuntimeError):
    pass


class Store(ABC):
    """Snapshot store contract: load never raises, save persists the whole snapshot."""

    name: str = "store"

    @abstractmethod
    def load(self) -> AppData:
        raise NotImplementedError

    @abstractmethod
    def save(self, data: AppData) -> None:
        raise NotImplementedError
