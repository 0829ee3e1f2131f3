from __future__ import annotations

import argparse
import logging
from datetime import date

from application.engine import WeeklyReviewEngine
from application.validator import IntegrityValidator
from infrastructure.persistence.json_store import JsonFileStore
from infrastructure.remote.remote_mirror import RemoteMirror

logger = logging.getLogger(__name__)


def build_engine() -> WeeklyReviewEngine:
    return WeeklyReviewEngine(validator=IntegrityValidator())


def build_store() -> JsonFileStore:
    mirror = RemoteMirror()
    return JsonFileStore(mirror=mirror if mirror.enabled else None)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="weekly-review", description="Print the weekly review dashboard as JSON.")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Evaluate as of this ISO date.")
    parser.add_argument("--restore", action="store_true", help="Replace the local snapshot with the remote copy first.")
    args = parser.parse_args(argv)

    store = build_store()
    if args.restore and store.restore_from_mirror() is None:
        logger.warning("No remote snapshot available, using local data path=%s", store.path)

    snapshot = build_engine().run(store.load(), args.date or date.today())
    print(snapshot.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
