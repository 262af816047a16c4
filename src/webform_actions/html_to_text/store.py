from __future__ import annotations

from typing import Collection, Dict, Iterable, List, Optional, Protocol

from pydantic import BaseModel

WEBFORM_URI_MARKER = "://webform/"
HTML_EXTENSIONS = (".htm", ".html")
TEXT_SUFFIX = ".txt"
TEXT_MIME = "text/plain"


class FileRecord(BaseModel):
    fid: int
    filename: str
    uri: str
    filemime: str = "application/octet-stream"


def is_pending_html(record: FileRecord) -> bool:
    """True for HTML uploads stored under a webform-managed path."""
    if WEBFORM_URI_MARKER not in record.uri:
        return False
    return record.filename.lower().endswith(HTML_EXTENSIONS)


class FileStore(Protocol):
    def count_pending(self, exclude: Collection[int] = ()) -> int: ...

    def query_pending(self, exclude: Collection[int] = (), limit: int = 100) -> List[FileRecord]: ...

    def move(self, record: FileRecord, new_uri: str) -> bool: ...

    def save(self, record: FileRecord) -> None: ...


class InMemoryFileStore:
    """Dict-backed store. `fail_moves` lists fids whose move should fail."""

    def __init__(self, records: Iterable[FileRecord] = (), fail_moves: Collection[int] = ()) -> None:
        self._records: Dict[int, FileRecord] = {r.fid: r.model_copy() for r in records}
        self.fail_moves = set(fail_moves)
        self.moved: List[tuple[str, str]] = []

    def get(self, fid: int) -> Optional[FileRecord]:
        rec = self._records.get(fid)
        return rec.model_copy() if rec else None

    def all(self) -> List[FileRecord]:
        return [self._records[fid].model_copy() for fid in sorted(self._records)]

    def _pending(self, exclude: Collection[int]) -> List[FileRecord]:
        skip = set(exclude or ())
        return [
            self._records[fid]
            for fid in sorted(self._records)
            if fid not in skip and is_pending_html(self._records[fid])
        ]

    def count_pending(self, exclude: Collection[int] = ()) -> int:
        return len(self._pending(exclude))

    def query_pending(self, exclude: Collection[int] = (), limit: int = 100) -> List[FileRecord]:
        return [r.model_copy() for r in self._pending(exclude)[: max(0, int(limit))]]

    def move(self, record: FileRecord, new_uri: str) -> bool:
        if record.fid in self.fail_moves:
            return False
        self.moved.append((record.uri, new_uri))
        return True

    def save(self, record: FileRecord) -> None:
        self._records[record.fid] = record.model_copy()
