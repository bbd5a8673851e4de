#!/usr/bin/env python3
"""
List the saved content history from whichever backend the environment selects
(SQL when DATABASE_URL is set and reachable, the local JSON slot otherwise).

Usage:
  python scripts/show_history.py [--limit 20] [--full]
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# make creator_api importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from creator_api.core.config import get_settings  # noqa: E402
from creator_api.core.logs import setup_logging  # noqa: E402
from creator_api.domain.records import BACKEND_ID_FIELD  # noqa: E402
from creator_api.services.history_service import build_history_store  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Show saved content history")
    ap.add_argument("--limit", type=int, default=20, help="How many of the latest records to print")
    ap.add_argument("--full", action="store_true", help="Print description and script too")
    args = ap.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)
    store = build_history_store(settings)
    mode = asyncio.run(store.initialize())
    records = store.current_list()

    print(f"Backend: {mode.value if mode else 'none'} ({len(records)}/{store.limit} records)")
    shown = records[-args.limit:] if args.limit > 0 else []
    for record in shown:
        print(f"- [{record.get('created_at', '')}] {record.get('topic', '')}")
        print(f"  id: {record.get(BACKEND_ID_FIELD, '')}")
        print(f"  title: {record.get('title_1') or 'No title'}")
        if args.full:
            print(f"  description: {record.get('description', '')}")
            print(f"  script:\n{record.get('script', '')}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
