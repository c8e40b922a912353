"""
remote.py — High-score and news client.

HighScore records are signed with HMAC-SHA256 over their compact JSON form
and posted inside a {"signature", "data"} envelope. All calls swallow
transport and decoding failures into plain results (False / None / []);
server records are validated with pydantic. RemoteWorker runs the calls
off the main loop, announcing completion with a single REMOTE_EVENT.
"""

import hashlib
import hmac
import json
import logging
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional

import httpx
import pygame
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .config import (
    HOST, HIGH_SCORES_PATH, MESSAGES_PATH, HIGH_SCORES_LIMIT, REQUEST_TIMEOUT,
    SECRET_FLC, SECRET_IRONSYS, APP_VERSION, APP_PLATFORM, REMOTE_EVENT,
)

logger = logging.getLogger(__name__)


def sign(payload: str, secret: str) -> str:
    """Hex HMAC-SHA256 of `payload` keyed by `secret`."""
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


# ────────────────────────── Records ──────────────────────────────
@dataclass(frozen=True)
class HighScore:
    """A finished round as submitted to the server. Field order is wire order."""
    player_name: str
    score: int
    eli_mode: bool
    board_width: int
    board_height: int
    fruits: int
    special_fruits: int
    ticker_delay: int
    start_timestamp: int
    end_timestamp: int
    app_version: str = APP_VERSION
    goos: str = APP_PLATFORM

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))

    def envelope(self, secret: str) -> str:
        """Request body; `data` is embedded byte-for-byte as signed."""
        data = self.to_json()
        return '{"signature":%s,"data":%s}' % (json.dumps(sign(data, secret)), data)


class OnlineHighScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_name: str
    score: int
    eli_mode: bool
    board_width: int = 0
    board_height: int = 0
    fruits: int = 0
    special_fruits: int = 0
    duration: int = 0
    created_at: datetime


class OnlineMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    created_at: datetime


HIGH_SCORES_ADAPTER = TypeAdapter(List[OnlineHighScore])
MESSAGES_ADAPTER = TypeAdapter(List[OnlineMessage])


# ─────────────────────────── Client ──────────────────────────────
class ScoreClient:
    """Synchronous httpx client; meant to be called from RemoteWorker threads."""

    def __init__(
        self,
        base_url: str = HOST,
        secret: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.secret = SECRET_FLC + SECRET_IRONSYS if secret is None else secret
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def post_high_score(self, score: HighScore) -> bool:
        """True only on HTTP 201."""
        try:
            response = self._client.post(
                HIGH_SCORES_PATH,
                content=score.envelope(self.secret),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            logger.warning("Posting high score failed: %s", exc)
            return False
        if response.status_code != 201:
            logger.warning("Posting high score rejected with HTTP %d", response.status_code)
            return False
        logger.info("High score %d posted for %s", score.score, score.player_name)
        return True

    def fetch_high_scores(self, limit: int = HIGH_SCORES_LIMIT) -> Optional[List[OnlineHighScore]]:
        """Leaderboard on HTTP 200, otherwise None."""
        try:
            response = self._client.get(HIGH_SCORES_PATH, params={"limit": limit})
            if response.status_code != 200:
                logger.warning("Fetching high scores returned HTTP %d", response.status_code)
                return None
            return HIGH_SCORES_ADAPTER.validate_python(response.json())
        except (httpx.HTTPError, ValidationError, ValueError) as exc:
            logger.warning("Fetching high scores failed: %s", exc)
            return None

    def fetch_messages(
        self,
        app_version: str = APP_VERSION,
        goos: str = APP_PLATFORM,
    ) -> List[OnlineMessage]:
        """News items; any failure reads as no news."""
        try:
            response = self._client.get(
                MESSAGES_PATH, params={"app_version": app_version, "goos": goos},
            )
            response.raise_for_status()
            return MESSAGES_ADAPTER.validate_python(response.json())
        except (httpx.HTTPError, ValidationError, ValueError) as exc:
            logger.info("No server messages: %s", exc)
            return []


# ─────────────────────────── Worker ──────────────────────────────
class RemoteWorker:
    """
    Runs one remote call per daemon thread. When the call returns, exactly
    one REMOTE_EVENT carrying `kind` and `result` is handed to `notify`
    (pygame.event.post by default), which the main loop picks up with the
    rest of its events. A completion arriving after pygame has quit is
    dropped.
    """

    def __init__(self, notify: Optional[Callable[[pygame.event.Event], Any]] = None):
        self.notify = notify or pygame.event.post

    def submit(self, kind: str, call: Callable[[], Any]) -> threading.Thread:
        thread = threading.Thread(target=self._run, args=(kind, call), daemon=True)
        thread.start()
        return thread

    def _run(self, kind: str, call: Callable[[], Any]) -> None:
        try:
            result = call()
        except Exception:
            logger.exception("Remote call %s crashed", kind)
            result = None
        try:
            self.notify(pygame.event.Event(REMOTE_EVENT, kind=kind, result=result))
        except pygame.error as exc:
            # event queue is gone once the controller has shut pygame down
            logger.debug("Dropped %s completion: %s", kind, exc)
