from __future__ import annotations

import json
import logging
import os
import socket
import time
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


class RemoteMirror:
    """Mirrors the whole snapshot into a single row of a PostgREST table (Supabase)."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        table: str | None = None,
        row_id: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("SUPABASE_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("SUPABASE_KEY", "")
        self.table = table or os.getenv("SUPABASE_TABLE", "user_data")
        self.row_id = row_id or os.getenv("SUPABASE_ROW_ID", "user_1")
        self.timeout_seconds = timeout_seconds or float(os.getenv("SUPABASE_TIMEOUT_SECONDS", "10"))

    @property
    def enabled(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def push(self, payload: dict[str, Any]) -> bool:
        if not self.enabled:
            return False
        started = time.perf_counter()
        row = {
            "id": self.row_id,
            "data": payload,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        headers = self._headers()
        headers["Prefer"] = "resolution=merge-duplicates,return=minimal"
        req = urllib.request.Request(
            url=f"{self.base_url}/rest/v1/{self.table}?on_conflict=id",
            data=json.dumps(row).encode("utf-8"),
            headers=headers,
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                status = resp.status
        except (socket.timeout, urllib.error.URLError, TimeoutError) as exc:
            # Fail-soft: the local file is the source of truth.
            logger.warning("RemoteMirror push failed after %.2fs: %s", time.perf_counter() - started, exc)
            return False

        logger.info("RemoteMirror push complete in %.2fs status=%s table=%s", time.perf_counter() - started, status, self.table)
        return True

    def fetch(self) -> dict[str, Any] | None:
        if not self.enabled:
            return None
        started = time.perf_counter()
        query = urllib.parse.urlencode({"id": f"eq.{self.row_id}", "select": "data"})
        req = urllib.request.Request(
            url=f"{self.base_url}/rest/v1/{self.table}?{query}",
            headers=self._headers(),
            method="GET",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                rows = json.loads(resp.read().decode("utf-8"))
        except (socket.timeout, urllib.error.URLError, TimeoutError, json.JSONDecodeError) as exc:
            logger.warning("RemoteMirror fetch failed after %.2fs: %s", time.perf_counter() - started, exc)
            return None

        if not isinstance(rows, list) or not rows or not isinstance(rows[0], dict):
            logger.info("RemoteMirror fetch found no row id=%s", self.row_id)
            return None
        data = rows[0].get("data")
        logger.info("RemoteMirror fetch complete in %.2fs", time.perf_counter() - started)
        return data if isinstance(data, dict) else None
