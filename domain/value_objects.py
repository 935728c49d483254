from dataclasses import dataclass


@dataclass(frozen=True)
class FileMetadata:
    original_name: str
    size_bytes: int
    content_type: str | None = None


@dataclass(frozen=True)
class Progress:
    percent: int  # 0–100
    completed: bool
