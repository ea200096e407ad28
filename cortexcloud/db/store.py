"""Storage-service interface, its in-memory adapter and the FastAPI dependency.

Handlers receive a ``Store`` through ``get_store``. ``InMemoryStore`` keeps
everything in process memory and loses it on restart; a durable backend
implements the same ``Store`` protocol and is attached to ``app.state.store``
instead.
"""

import uuid
from typing import Any, Protocol, TypeVar

from fastapi import Request

from .models import Analysis, ChatMessage, Dataset, Record, User, utcnow

RecordT = TypeVar("RecordT", bound=Record)


class Store(Protocol):
    """Create/get/list/update/delete capabilities for every stored entity."""

    async def create_user(self, user: User) -> User: ...
    async def get_user(self, user_id: uuid.UUID) -> User | None: ...
    async def get_user_by_email(self, email: str) -> User | None: ...
    async def list_users(self) -> list[User]: ...
    async def update_user(self, user_id: uuid.UUID, **changes: Any) -> User | None: ...
    async def delete_user(self, user_id: uuid.UUID) -> bool: ...

    async def create_dataset(self, dataset: Dataset) -> Dataset: ...
    async def get_dataset(self, dataset_id: uuid.UUID) -> Dataset | None: ...
    async def list_datasets(self, user_id: uuid.UUID) -> list[Dataset]: ...
    async def update_dataset(self, dataset_id: uuid.UUID, **changes: Any) -> Dataset | None: ...
    async def delete_dataset(self, dataset_id: uuid.UUID) -> bool: ...

    async def create_analysis(self, analysis: Analysis) -> Analysis: ...
    async def get_analysis(self, analysis_id: uuid.UUID) -> Analysis | None: ...
    async def list_analyses_by_dataset(self, dataset_id: uuid.UUID) -> list[Analysis]: ...
    async def list_analyses_by_user(self, user_id: uuid.UUID) -> list[Analysis]: ...
    async def update_analysis(
        self, analysis_id: uuid.UUID, **changes: Any
    ) -> Analysis | None: ...
    async def delete_analysis(self, analysis_id: uuid.UUID) -> bool: ...

    async def put_file(self, key: str, content: str) -> None: ...
    async def get_file(self, key: str) -> str | None: ...
    async def delete_file(self, key: str) -> bool: ...

    async def add_chat_message(self, message: ChatMessage) -> ChatMessage: ...
    async def list_chat_messages(self, user_id: uuid.UUID, limit: int) -> list[ChatMessage]: ...
    async def clear_chat_messages(self, user_id: uuid.UUID) -> None: ...


def _apply(record: RecordT, changes: dict[str, Any]) -> RecordT:
    return record.model_copy(update={**changes, "updated_at": utcnow()})


def _newest_first(records: list[RecordT]) -> list[RecordT]:
    return sorted(records, key=lambda record: record.created_at, reverse=True)


class InMemoryStore:
    """Dict-backed ``Store``. Not shared between processes."""

    def __init__(self) -> None:
        self._users: dict[uuid.UUID, User] = {}
        self._user_ids_by_email: dict[str, uuid.UUID] = {}
        self._datasets: dict[uuid.UUID, Dataset] = {}
        self._analyses: dict[uuid.UUID, Analysis] = {}
        self._files: dict[str, str] = {}
        self._chat: dict[uuid.UUID, list[ChatMessage]] = {}

    async def create_user(self, user: User) -> User:
        self._users[user.id] = user
        self._user_ids_by_email[user.email.lower()] = user.id
        return user

    async def get_user(self, user_id: uuid.UUID) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        user_id = self._user_ids_by_email.get(email.lower())
        return self._users.get(user_id) if user_id else None

    async def list_users(self) -> list[User]:
        return _newest_first(list(self._users.values()))

    async def update_user(self, user_id: uuid.UUID, **changes: Any) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = _apply(user, changes)
        if updated.email.lower() != user.email.lower():
            self._user_ids_by_email.pop(user.email.lower(), None)
            self._user_ids_by_email[updated.email.lower()] = user_id
        self._users[user_id] = updated
        return updated

    async def delete_user(self, user_id: uuid.UUID) -> bool:
        user = self._users.pop(user_id, None)
        if user is None:
            return False
        self._user_ids_by_email.pop(user.email.lower(), None)
        self._chat.pop(user_id, None)
        return True

    async def create_dataset(self, dataset: Dataset) -> Dataset:
        self._datasets[dataset.id] = dataset
        return dataset

    async def get_dataset(self, dataset_id: uuid.UUID) -> Dataset | None:
        return self._datasets.get(dataset_id)

    async def list_datasets(self, user_id: uuid.UUID) -> list[Dataset]:
        return _newest_first([d for d in self._datasets.values() if d.user_id == user_id])

    async def update_dataset(self, dataset_id: uuid.UUID, **changes: Any) -> Dataset | None:
        dataset = self._datasets.get(dataset_id)
        if dataset is None:
            return None
        self._datasets[dataset_id] = _apply(dataset, changes)
        return self._datasets[dataset_id]

    async def delete_dataset(self, dataset_id: uuid.UUID) -> bool:
        """Remove a dataset together with its stored file and analyses."""
        dataset = self._datasets.pop(dataset_id, None)
        if dataset is None:
            return False
        self._files.pop(dataset.storage_key, None)
        for analysis_id in [a.id for a in self._analyses.values() if a.dataset_id == dataset_id]:
            del self._analyses[analysis_id]
        return True

    async def create_analysis(self, analysis: Analysis) -> Analysis:
        self._analyses[analysis.id] = analysis
        return analysis

    async def get_analysis(self, analysis_id: uuid.UUID) -> Analysis | None:
        return self._analyses.get(analysis_id)

    async def list_analyses_by_dataset(self, dataset_id: uuid.UUID) -> list[Analysis]:
        return _newest_first([a for a in self._analyses.values() if a.dataset_id == dataset_id])

    async def list_analyses_by_user(self, user_id: uuid.UUID) -> list[Analysis]:
        return _newest_first([a for a in self._analyses.values() if a.user_id == user_id])

    async def update_analysis(self, analysis_id: uuid.UUID, **changes: Any) -> Analysis | None:
        analysis = self._analyses.get(analysis_id)
        if analysis is None:
            return None
        self._analyses[analysis_id] = _apply(analysis, changes)
        return self._analyses[analysis_id]

    async def delete_analysis(self, analysis_id: uuid.UUID) -> bool:
        return self._analyses.pop(analysis_id, None) is not None

    async def put_file(self, key: str, content: str) -> None:
        self._files[key] = content

    async def get_file(self, key: str) -> str | None:
        return self._files.get(key)

    async def delete_file(self, key: str) -> bool:
        return self._files.pop(key, None) is not None

    async def add_chat_message(self, message: ChatMessage) -> ChatMessage:
        self._chat.setdefault(message.user_id, []).append(message)
        return message

    async def list_chat_messages(self, user_id: uuid.UUID, limit: int) -> list[ChatMessage]:
        messages = self._chat.get(user_id, [])
        return messages[-limit:] if limit > 0 else []

    async def clear_chat_messages(self, user_id: uuid.UUID) -> None:
        self._chat.pop(user_id, None)


def get_store(request: Request) -> Store:
    """Return the store attached to the running application."""
    store: Store = request.app.state.store
    return store
