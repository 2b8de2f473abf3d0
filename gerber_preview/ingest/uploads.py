# gerber_preview/ingest/uploads.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, List, Optional, Sequence, Union


Content = Union[str, bytes, Callable[[], Union[str, bytes]]]


class FileReadError(Exception):
    """Text content of an uploaded file could not be produced."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Cannot read {name!r}: {reason}")
        self.name = name
        self.reason = reason


class FileRejected(ValueError):
    """An upload was refused by working-set validation."""

    def __init__(self, name: Optional[str], message: str) -> None:
        super().__init__(message)
        self.name = name


class DuplicateFileName(FileRejected):
    pass


@dataclass(frozen=True)
class UploadedFile:
    """
    Name + content pair handed over by the upload collaborator.

    content may be text, raw bytes (decoded as UTF-8) or a zero-argument
    reader that produces either. Files are identified by name.
    """
    name: str
    content: Content = ""

    def read_text(self) -> str:
        data = self.content
        if callable(data):
            try:
                data = data()
            except (OSError, ValueError) as exc:
                raise FileReadError(self.name, str(exc)) from exc

        if isinstance(data, bytes):
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise FileReadError(self.name, "content is not UTF-8 text") from exc

        if isinstance(data, str):
            return data

        raise FileReadError(self.name, f"unsupported content type {type(data).__name__}")

    @property
    def size_bytes(self) -> Optional[int]:
        """Size of in-memory content; None for lazily read files."""
        if isinstance(self.content, bytes):
            return len(self.content)
        if isinstance(self.content, str):
            return len(self.content.encode("utf-8"))
        return None

    @property
    def extension(self) -> str:
        return PurePosixPath(self.name.lower()).suffix

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        return cls(name=path.name, content=path.read_bytes)


def format_file_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def validate_uploads(
    existing: Sequence[UploadedFile],
    incoming: Iterable[UploadedFile],
    max_files: int,
    max_file_size_mb: float,
    accepted_formats: Sequence[str],
) -> List[UploadedFile]:
    """
    Validate a batch before it joins the working set.

    The whole batch is refused on the first problem so the working set
    never holds a partially added upload.
    """
    batch = list(incoming)

    if len(existing) + len(batch) > max_files:
        raise FileRejected(None, f"Maximum {max_files} files allowed")

    accepted = {fmt.lower() for fmt in accepted_formats}
    seen = {f.name for f in existing}
    limit_bytes = max_file_size_mb * 1024 * 1024

    for f in batch:
        if accepted and f.extension not in accepted:
            raise FileRejected(
                f.name,
                f"Invalid format: {f.extension or '(none)'}. Accepted: {', '.join(accepted_formats)}",
            )
        size = f.size_bytes
        if size is not None and size > limit_bytes:
            raise FileRejected(
                f.name,
                f"File too large ({format_file_size(size)}). Maximum size: {max_file_size_mb:g}MB",
            )
        if f.name in seen:
            raise DuplicateFileName(f.name, f"A file named {f.name!r} is already in the working set")
        seen.add(f.name)

    return batch
