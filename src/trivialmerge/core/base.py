"""Base models shared by configuration and runtime state.

Kept apart from config.py so that log.py can build its sink models on
them without importing the full configuration.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Closeable(Protocol):
    """Anything holding resources released by close()."""

    def close(self) -> None:
        ...


class BaseCloseable(BaseModel):
    """Model that closes its Closeable fields when it is closed.

    Usable as a context manager. Closing walks the model fields in
    declaration order and keeps going when one of them fails, so a
    broken log sink cannot keep the others open.
    """

    def close(self):
        """Close every Closeable field, reporting failures to stderr."""
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    print(
                        f"Warning: Error closing {field_name}: {e}",
                        file=sys.stderr,
                    )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        self.close()
        return False


class BaseConfig(BaseCloseable):
    """Marker base for configuration sections (YAML/env/CLI)."""


class BaseState(BaseCloseable):
    """Marker base for runtime state sections."""


__all__ = ["Closeable", "BaseCloseable", "BaseConfig", "BaseState"]
