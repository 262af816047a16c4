from __future__ import annotations

import logging
from typing import Callable, List, Optional, Set

from pydantic import BaseModel, Field, computed_field

from webform_actions.html_to_text.store import TEXT_MIME, TEXT_SUFFIX, FileRecord, FileStore

logger = logging.getLogger(__name__)

FINISHED_MESSAGE = "HTML files conversion to text completed."
ERROR_MESSAGE = "Finished with an error."


class ConversionProgress(BaseModel):
    progress: int = 0
    max: int = 0
    converted: int = 0
    failed: int = 0
    message: str = ""

    @computed_field  # type: ignore[misc]
    @property
    def finished(self) -> float:
        if self.max <= 0 or self.progress >= self.max:
            return 1.0
        return self.progress / self.max


class ConversionResult(BaseModel):
    success: bool
    message: str
    progress: ConversionProgress
    failed_fids: List[int] = Field(default_factory=list)


class HtmlToTextConverter:
    """
    Renames uploaded HTML files to `*.txt` so they are served as plain text.

    Work is done a page at a time; files whose move fails are skipped on
    later pages so a run always terminates.
    """

    def __init__(self, store: FileStore, *, batch_limit: Optional[int] = None) -> None:
        if batch_limit is None:
            from webform_actions.settings import load_settings

            batch_limit = load_settings().html_to_text_batch_limit
        self.store = store
        self.batch_limit = max(1, int(batch_limit))
        self.failed: Set[int] = set()

    def question(self) -> str:
        return f"Are you sure you want to convert {self.count_pending()} files(s) from HTML to text?"

    @staticmethod
    def description() -> str:
        return (
            "All *.htm and *.html file extensions will be suffixed with *.txt, "
            "this will force all HTML files to be displayed as plain text. "
            "This action cannot be undone."
        )

    @staticmethod
    def confirm_text() -> str:
        return "Convert HTML files to text"

    def count_pending(self) -> int:
        return self.store.count_pending(exclude=self.failed)

    def is_complete(self) -> bool:
        return self.count_pending() == 0

    def convert(self, record: FileRecord) -> bool:
        new_uri = record.uri + TEXT_SUFFIX
        if not self.store.move(record, new_uri):
            logger.warning("could not move fid=%s uri=%s", record.fid, record.uri)
            self.failed.add(record.fid)
            return False
        updated = record.model_copy(
            update={
                "filename": record.filename + TEXT_SUFFIX,
                "uri": new_uri,
                "filemime": TEXT_MIME,
            }
        )
        self.store.save(updated)
        return True

    def process_page(self, page_size: Optional[int] = None) -> int:
        limit = self.batch_limit if page_size is None else max(1, int(page_size))
        records = self.store.query_pending(exclude=self.failed, limit=limit)
        converted = 0
        for record in records:
            if self.convert(record):
                converted += 1
        logger.debug("html_to_text page size=%s loaded=%s converted=%s", limit, len(records), converted)
        return converted

    def run(self, on_progress: Optional[Callable[[ConversionProgress], None]] = None) -> ConversionResult:
        progress = ConversionProgress(max=self.count_pending())
        failed_before = len(self.failed)
        while True:
            pending_before = self.count_pending()
            if pending_before == 0:
                break
            converted = self.process_page()
            failed_now = len(self.failed) - failed_before
            progress.converted += converted
            progress.failed = failed_now
            progress.progress = progress.converted + progress.failed
            progress.message = f"Converting {progress.progress} of {progress.max} files..."
            if on_progress is not None:
                on_progress(progress)
            if self.count_pending() >= pending_before:
                # Nothing moved forward; stop instead of spinning.
                break

        success = progress.failed == 0 and self.is_complete()
        message = FINISHED_MESSAGE if success else ERROR_MESSAGE
        logger.info(
            "html_to_text finished converted=%s failed=%s total=%s",
            progress.converted,
            progress.failed,
            progress.max,
        )
        return ConversionResult(
            success=success,
            message=message,
            progress=progress,
            failed_fids=sorted(self.failed),
        )
