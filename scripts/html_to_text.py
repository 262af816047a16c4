#!/usr/bin/env python3
"""
Convert uploaded webform HTML files to plain text from the command line.

    python scripts/html_to_text.py --count
    python scripts/html_to_text.py --yes --page-size 50
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_import_paths() -> None:
    root = _repo_root()
    src = root / "src"
    for p in (root, src):
        s = str(p)
        if s not in sys.path:
            sys.path.insert(0, s)


def main() -> int:
    parser = argparse.ArgumentParser(description="Suffix webform HTML uploads with .txt so they are served as plain text.")
    parser.add_argument("--count", action="store_true", help="Only print how many files would be converted.")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")
    parser.add_argument("--page-size", type=int, default=None, help="Files per page (defaults to settings).")
    args = parser.parse_args()

    _ensure_import_paths()
    from dotenv import load_dotenv

    from webform_actions.html_to_text import HtmlToTextConverter
    from webform_actions.html_to_text.supabase_store import SupabaseFileStore

    load_dotenv(_repo_root() / ".env", override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    converter = HtmlToTextConverter(SupabaseFileStore.from_env(), batch_limit=args.page_size)
    if args.count:
        print(converter.count_pending())
        return 0

    if not args.yes:
        answer = input(f"{converter.question()} [y/N] ").strip().lower()
        if answer not in {"y", "yes"}:
            print("Cancelled.")
            return 1

    result = converter.run(on_progress=lambda p: print(p.message, flush=True))
    print(result.message)
    return 0 if result.success else 2


if __name__ == "__main__":
    raise SystemExit(main())
