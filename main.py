from __future__ import annotations

import logging
import os
import sys
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from interface.api import app
from interface.cli import main as cli_main

logging.getLogger("weekly_review").info(
    "Weekly review data_path=%s mirror=%s",
    os.getenv("WEEKLY_REVIEW_DATA_PATH", "data/weekly_review.json"),
    "on" if os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_KEY") else "off",
)

if __name__ == "__main__":
    cli_main(sys.argv[1:])
