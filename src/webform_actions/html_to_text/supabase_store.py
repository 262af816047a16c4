"""
Supabase-backed file record store.

Reads managed file rows from the `file_managed` table (fid, filename, uri,
filemime). When `WEBFORM_FILES_BUCKET` is set, moves also rename the object in
Supabase Storage; otherwise only the row is rewritten.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Collection, List, Optional

from supabase import Client, create_client

from webform_actions.html_to_text.store import WEBFORM_URI_MARKER, FileRecord

logger = logging.getLogger(__name__)

FILE_TABLE = "file_managed"
_COLUMNS = "fid, filename, uri, filemime"

_client: Optional[Client] = None


def get_supabase_client() -> Optional[Client]:
    """Get or create Supabase client (singleton)."""
    global _client

    if _client is not None:
        return _client

    url = os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")
    if not url or not key:
        return None

    try:
        _client = create_client(url, key)
    except Exception as e:
        logger.error("failed to create Supabase client: %s", e)
        return None
    return _client


def storage_path(uri: str) -> str:
    """`private://webform/contact/1/a.html` -> `webform/contact/1/a.html`."""
    _, sep, rest = str(uri or "").partition("://")
    return rest if sep else str(uri or "")


class SupabaseFileStore:
    def __init__(self, client: Client, *, table: str = FILE_TABLE, bucket: Optional[str] = None) -> None:
        self.client = client
        self.table = table
        self.bucket = bucket if bucket is not None else (os.getenv("WEBFORM_FILES_BUCKET") or "").strip() or None

    @classmethod
    def from_env(cls) -> "SupabaseFileStore":
        client = get_supabase_client()
        if client is None:
            raise RuntimeError("Supabase is not configured (set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY)")
        return cls(client)

    def _pending_query(self, exclude: Collection[int], *, count: bool = False) -> Any:
        query = self.client.table(self.table).select(_COLUMNS, count="exact" if count else None)
        query = query.like("uri", f"%{WEBFORM_URI_MARKER}%")
        query = query.or_("filename.ilike.%.htm,filename.ilike.%.html")
        skip = sorted({int(fid) for fid in exclude or ()})
        if skip:
            query = query.not_.in_("fid", skip)
        return query

    def count_pending(self, exclude: Collection[int] = ()) -> int:
        result = self._pending_query(exclude, count=True).limit(1).execute()
        return int(result.count or 0)

    def query_pending(self, exclude: Collection[int] = (), limit: int = 100) -> List[FileRecord]:
        result = self._pending_query(exclude).order("fid").limit(max(1, int(limit))).execute()
        out: List[FileRecord] = []
        for row in result.data or []:
            if not isinstance(row, dict):
                continue
            out.append(FileRecord.model_validate(row))
        return out

    def move(self, record: FileRecord, new_uri: str) -> bool:
        if not self.bucket:
            return True
        try:
            self.client.storage.from_(self.bucket).move(storage_path(record.uri), storage_path(new_uri))
        except Exception as e:
            logger.warning("storage move failed fid=%s uri=%s: %s", record.fid, record.uri, e)
            return False
        return True

    def save(self, record: FileRecord) -> None:
        (
            self.client.table(self.table)
            .update({"filename": record.filename, "uri": record.uri, "filemime": record.filemime})
            .eq("fid", record.fid)
            .execute()
        )
