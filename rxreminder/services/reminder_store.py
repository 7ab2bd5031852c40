"""Reminder persistence"""
import json
import logging
from pathlib import Path
from typing import Generic, List, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from rxreminder.core.config import Config

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ReminderRepository(Generic[ModelT]):
    """Load/save interface for a whole collection of reminders"""

    def load(self) -> List[ModelT]:
        raise NotImplementedError

    def save(self, items: Sequence[ModelT]) -> None:
        raise NotImplementedError


class InMemoryRepository(ReminderRepository[ModelT]):
    """Repository kept in process memory"""

    def __init__(self, items: Sequence[ModelT] = ()):
        self._items: List[ModelT] = list(items)

    def load(self) -> List[ModelT]:
        return list(self._items)

    def save(self, items: Sequence[ModelT]) -> None:
        self._items = list(items)


class JsonFileRepository(ReminderRepository[ModelT]):
    """Repository stored as a JSON array in a single file"""

    def __init__(self, path: Path, model: Type[ModelT]):
        """
        Initialize JSON file repository

        Args:
            path: JSON file to read and write
            model: Pydantic model of the stored items
        """
        self.path = Path(path)
        self.model = model

    def load(self) -> List[ModelT]:
        """Load all items, or an empty list if the file is missing or unreadable"""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [self.model.model_validate(item) for item in data]
        except (json.JSONDecodeError, ValidationError, ValueError, IOError) as e:
            logger.error("Failed to load %s from %s: %s", self.model.__name__, self.path, e)
            return []

    def save(self, items: Sequence[ModelT]) -> None:
        """Replace the stored collection"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        json_indent = Config.get("defaults", "json_indent", default=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump([item.model_dump() for item in items], f, indent=json_indent, ensure_ascii=False)
        tmp_path.replace(self.path)
        logger.debug("Saved %d %s item(s) to %s", len(items), self.model.__name__, self.path)
