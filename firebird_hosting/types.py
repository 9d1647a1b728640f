from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    CONFIGURATION = "configuration"
    DUPLICATE_RESOURCE = "duplicate_resource"
    UNRESOLVED = "unresolved"


@dataclass
class HostingError(Exception):
    category: ErrorCategory
    message: str
    resource: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.category.value}: {self.message}"
