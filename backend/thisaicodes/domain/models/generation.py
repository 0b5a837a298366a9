"""Domain objects for prompt-to-code generation requests."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class GenerationStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class GenerationType(str, Enum):
    COMPONENT = "component"
    PAGE = "page"
    API = "api"
    FULLSTACK = "fullstack"


class Framework(str, Enum):
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"
    NEXTJS = "nextjs"


DEFAULT_FRAMEWORK = Framework.REACT.value

_CONTENT_TYPES = {
    "tsx": "text/tsx",
    "ts": "text/typescript",
    "jsx": "text/jsx",
    "js": "text/javascript",
    "css": "text/css",
    "html": "text/html",
    "json": "application/json",
    "md": "text/markdown",
}


def content_type_for(filename: str) -> str:
    """Map a file name to the content type it is stored with."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return _CONTENT_TYPES.get(extension, "text/plain")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class GeneratedFile:
    name: str
    content: str
    type: str = "text/plain"


@dataclass(slots=True)
class GeneratedCode:
    """Normalized provider output: the files plus human-facing notes."""

    files: List[GeneratedFile] = field(default_factory=list)
    description: str = ""
    instructions: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "files": [asdict(item) for item in self.files],
            "description": self.description,
            "instructions": self.instructions,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedCode":
        files: List[GeneratedFile] = []
        raw_files = data.get("files")
        if not isinstance(raw_files, list):
            raw_files = []
        for raw in raw_files:
            if not isinstance(raw, dict) or not raw.get("name"):
                continue
            name = str(raw["name"])
            files.append(
                GeneratedFile(
                    name=name,
                    content=str(raw.get("content") or ""),
                    type=str(raw.get("type") or content_type_for(name)),
                )
            )
        return cls(
            files=files,
            description=str(data.get("description") or ""),
            instructions=str(data.get("instructions") or ""),
        )


@dataclass(slots=True)
class FileDescriptor:
    name: str
    url: str
    type: str

    def as_dict(self) -> Dict[str, str]:
        return {"name": self.name, "url": self.url, "type": self.type}


@dataclass(frozen=True, slots=True)
class GenerationContext:
    """Caller-scoped values a generation runs under."""

    account_id: int
    project_id: Optional[str] = None


@dataclass(slots=True)
class Generation:
    id: str
    account_id: int
    prompt: str
    type: str
    framework: str = DEFAULT_FRAMEWORK
    project_id: Optional[str] = None
    status: GenerationStatus = GenerationStatus.PROCESSING
    result: Optional[Dict[str, Any]] = None
    files: List[FileDescriptor] = field(default_factory=list)
    error: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None

    @classmethod
    def start(
        cls, context: GenerationContext, *, prompt: str, type: str, framework: str
    ) -> "Generation":
        return cls(
            id=str(uuid.uuid4()),
            account_id=context.account_id,
            project_id=context.project_id,
            prompt=prompt,
            type=type,
            framework=framework or DEFAULT_FRAMEWORK,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status != GenerationStatus.PROCESSING

    def complete(self, code: GeneratedCode, files: List[FileDescriptor]) -> None:
        self._ensure_processing(GenerationStatus.COMPLETED)
        self.status = GenerationStatus.COMPLETED
        self.result = code.as_dict()
        self.files = list(files)
        self.completed_at = _utcnow()

    def fail(self, error: str) -> None:
        self._ensure_processing(GenerationStatus.FAILED)
        self.status = GenerationStatus.FAILED
        self.error = error

    def _ensure_processing(self, target: GenerationStatus) -> None:
        if self.is_terminal:
            raise ValueError(f"Invalid transition {self.status.value} -> {target.value}")
