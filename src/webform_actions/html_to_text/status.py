from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from webform_actions.html_to_text.store import FileStore


class Requirement(BaseModel):
    key: str
    title: str
    severity: Literal["ok", "warning", "error"] = "ok"
    value: str = ""
    description: str = ""


def html_file_requirements(store: FileStore, *, xss_block: Optional[bool] = None) -> List[Requirement]:
    """
    Status report entries for HTML uploads.

    `xss_block` defaults to the `file_xss_block` setting.
    """
    if xss_block is None:
        from webform_actions.settings import load_settings

        xss_block = load_settings().file_xss_block

    out: List[Requirement] = []
    total = store.count_pending()
    if total:
        out.append(
            Requirement(
                key="webform_file_html",
                title="Webform files: HTML file uploads",
                severity="warning",
                value=f"{total} file(s)",
                description=(
                    "HTML files that may contain Cross-Site Scripting (XSS) have been uploaded. "
                    f"You should convert {total} existing file(s) from HTML to plain text."
                ),
            )
        )
    else:
        out.append(
            Requirement(
                key="webform_file_html",
                title="Webform files: HTML file uploads",
                value="No HTML files found.",
            )
        )

    if not xss_block:
        out.append(
            Requirement(
                key="webform_file_xss_block",
                title="Webform files: XSS block",
                severity="warning",
                value="Disabled",
                description=(
                    "Blocking users from uploading HTML files, which may contain "
                    "Cross-Site Scripting (XSS) is not set."
                ),
            )
        )
    else:
        out.append(
            Requirement(
                key="webform_file_xss_block",
                title="Webform files: XSS block",
                value="Enabled",
            )
        )
    return out
