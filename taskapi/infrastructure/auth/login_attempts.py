# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from dataclasses import dataclass
from threading import Lock

from taskapi.shared.logging import logger


@dataclass
class LoginAttempt:
    timestamp: float
    success: bool
    ip_address: str | None = None


class LoginAttemptsTracker:
    """Per-identifier failed login bookkeeping with temporary lockouts.

    Keys are the normalized login identifiers as typed by the caller, whether
    or not they match a real account, so a lockout reveals nothing about
    which usernames or emails exist.

    Identifiers with no failure inside the window and no active lockout are
    pruned periodically, so arbitrary unknown identifiers cannot grow the
    table without bound.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        window_seconds: float = 60 * 60,
        clock=time.monotonic,
    ) -> None:
        self._max_attempts = max(1, int(max_attempts))
        self._lockout_seconds = float(lockout_seconds)
        self._window_seconds = float(window_seconds)
        self._clock = clock
        self._attempts: dict[str, deque[LoginAttempt]] = defaultdict(
            lambda: deque(maxlen=self._max_attempts * 2)
        )
        self._lockouts: dict[str, float] = {}
        self._lock = Lock()
        self._prune_interval = min(self._window_seconds, 60.0)
        self._last_prune = self._clock()

    @staticmethod
    def _key(identifier: str) -> str:
        return identifier.strip().lower()

    def record(self, identifier: str, success: bool, ip_address: str | None = None) -> None:
        key = self._key(identifier)
        with self._lock:
            if success:
                self._attempts.pop(key, None)
                if self._lockouts.pop(key, None) is not None:
                    logger.info(f"login_attempts: cleared lockout for identifier={key}")
                return

            now = self._clock()
            if now - self._last_prune >= self._prune_interval:
                self._prune(now)
            self._attempts[key].append(
                LoginAttempt(timestamp=now, success=False, ip_address=ip_address)
            )
            self._check_and_lock(key)

    def tracked_identifiers(self) -> int:
        with self._lock:
            return len(self._attempts.keys() | self._lockouts.keys())

    def is_locked(self, identifier: str) -> bool:
        return self.lockout_remaining(identifier) > 0

    def lockout_remaining(self, identifier: str) -> float:
        key = self._key(identifier)
        with self._lock:
            unlock_time = self._lockouts.get(key)
            if unlock_time is None:
                return 0.0
            remaining = unlock_time - self._clock()
            if remaining <= 0:
                del self._lockouts[key]
                self._attempts.pop(key, None)
                logger.info(f"login_attempts: lockout expired for identifier={key}")
                return 0.0
            return remaining

    def _prune(self, now: float) -> None:
        cutoff = now - self._window_seconds
        for key, unlock_time in list(self._lockouts.items()):
            if unlock_time <= now:
                del self._lockouts[key]
        stale = [
            key
            for key, attempts in self._attempts.items()
            if key not in self._lockouts
            and (not attempts or attempts[-1].timestamp <= cutoff)
        ]
        for key in stale:
            del self._attempts[key]
        self._last_prune = now
        if stale:
            logger.debug(f"login_attempts: pruned {len(stale)} stale identifiers")

    def _check_and_lock(self, key: str) -> None:
        now = self._clock()
        cutoff = now - self._window_seconds
        failed = [a for a in self._attempts[key] if not a.success and a.timestamp > cutoff]

        if len(failed) >= self._max_attempts:
            self._lockouts[key] = now + self._lockout_seconds
            ips = {a.ip_address for a in failed if a.ip_address}
            logger.warning(
                f"login_attempts: LOCKED identifier={key} "
                f"failed_attempts={len(failed)} "
                f"lockout_duration={self._lockout_seconds}s "
                f"ip_addresses={sorted(ips) if ips else 'unknown'}"
            )


__all__ = ["LoginAttempt", "LoginAttemptsTracker"]
