import logging
import os
import re
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from resume_tailor import config
from resume_tailor.schemas import SessionRecord

logger = logging.getLogger(__name__)

FILE_PREFIX = "resume-tailor-"

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def is_valid_session_id(session_id: Optional[str]) -> bool:
    return bool(session_id) and bool(_TOKEN_RE.match(session_id))


class SessionStore(ABC):
    """One pending SessionRecord per session id."""

    @abstractmethod
    def save(self, session_id: str, record: SessionRecord) -> None: ...

    @abstractmethod
    def load(self, session_id: str) -> Optional[SessionRecord]: ...

    @abstractmethod
    def delete(self, session_id: str) -> None: ...


class FileSessionStore(SessionStore):
    """
    Stores each record as JSON at ``<directory>/resume-tailor-<session>.json``.
    There is no locking: concurrent writers race and the last one wins, and a
    half-written or vanished file reads back as "no record".
    """

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory or config.SESSION_DIR

    def path_for(self, session_id: str) -> str:
        if not is_valid_session_id(session_id):
            raise ValueError("invalid session id")
        return os.path.join(self.directory, f"{FILE_PREFIX}{session_id}.json")

    def save(self, session_id: str, record: SessionRecord) -> None:
        path = self.path_for(session_id)
        with open(path, "w", encoding="utf-8") as f:
            f.write(record.model_dump_json(by_alias=True))
        logger.debug("session record written to %s", path)

    def load(self, session_id: str) -> Optional[SessionRecord]:
        if not is_valid_session_id(session_id):
            return None
        path = self.path_for(session_id)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return SessionRecord.model_validate_json(f.read())
        except (OSError, ValueError) as e:
            logger.info("no readable session record at %s: %s", path, e)
            return None

    def delete(self, session_id: str) -> None:
        if not is_valid_session_id(session_id):
            return
        os.unlink(self.path_for(session_id))


class MemorySessionStore(SessionStore):
    """In-process store; records older than ``max_age`` seconds are dropped."""

    def __init__(self, max_age: Optional[float] = None, clock=time.monotonic):
        self.max_age = config.SESSION_MAX_AGE if max_age is None else max_age
        self._clock = clock
        self._lock = threading.Lock()
        self._records: Dict[str, Tuple[float, SessionRecord]] = {}

    def _evict_expired(self) -> None:
        now = self._clock()
        expired = [k for k, (ts, _) in self._records.items() if now - ts > self.max_age]
        for k in expired:
            del self._records[k]

    def save(self, session_id: str, record: SessionRecord) -> None:
        if not is_valid_session_id(session_id):
            raise ValueError("invalid session id")
        with self._lock:
            self._evict_expired()
            self._records[session_id] = (self._clock(), record)

    def load(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            self._evict_expired()
            entry = self._records.get(session_id)
        return entry[1] if entry else None

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._records)


def build_session_store(backend: Optional[str] = None) -> SessionStore:
    backend = (backend or config.SESSION_BACKEND).lower()
    if backend == "memory":
        return MemorySessionStore()
    if backend == "file":
        return FileSessionStore()
    raise ValueError(f"unknown SESSION_BACKEND: {backend}")
