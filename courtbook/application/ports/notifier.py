from abc import ABC, abstractmethod

from courtbook.domain.entities.lifecycle_event import LifecycleEvent


class NotifierPort(ABC):
    @abstractmethod
    def emit(self, event: LifecycleEvent) -> None:
        raise NotImplementedError
