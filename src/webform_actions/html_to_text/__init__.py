"""
Batch conversion of uploaded HTML files to plain text.
"""

from .converter import (  # noqa: F401
    ERROR_MESSAGE,
    FINISHED_MESSAGE,
    ConversionProgress,
    ConversionResult,
    HtmlToTextConverter,
)
from .status import Requirement, html_file_requirements  # noqa: F401
from .store import FileRecord, FileStore, InMemoryFileStore, is_pending_html  # noqa: F401
