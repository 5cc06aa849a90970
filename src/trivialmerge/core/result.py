"""Result types for file resolution."""

from pathlib import Path

from pydantic import BaseModel


class FileReport(BaseModel):
    """What happened to one conflicted file."""

    path: Path
    resolved: int = 0
    unresolved: int = 0
    written: bool = False
    staged: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None
