"""Idempotency ledger for charge submissions.

Each idempotency key moves through two states: reserved (a submission
is talking to the gateway) and completed (the outcome is recorded and
replayed for every later submission with the same key). Released keys
are forgotten, so a failed attempt can be retried, and the oldest
completed keys are dropped once the ledger is full.

Thread safety:
    All state lives behind one ``threading.Lock``. The server may run
    several worker threads, each with its own event loop, sharing the
    same ledger.
"""

import threading
from collections.abc import Hashable
from dataclasses import dataclass

from paydesk.payments.errors import ChargeInProgress, IdempotencyConflict
from paydesk.payments.gateway import Charge


@dataclass(frozen=True, slots=True)
class ChargeOutcome:
    """The recorded result of one idempotent submission.

    Exactly one of ``charge`` (approved) or ``decline_code`` is set.
    """

    key: str
    charge: Charge | None = None
    decline_code: str | None = None

    @property
    def ok(self) -> bool:
        return self.charge is not None


@dataclass(slots=True)
class _Entry:
    fingerprint: Hashable
    outcome: ChargeOutcome | None = None


class IdempotencyLedger:
    """In-memory record of idempotency keys and their outcomes.

    Holds at most *max_entries* keys. Past that, the keys completed
    longest ago are forgotten first, along with their charges; reserved
    keys are never evicted, so a running submission keeps its claim.
    """

    __slots__ = ("_charges", "_completed", "_entries", "_lock", "max_entries")

    def __init__(self, max_entries: int = 10_000) -> None:
        if max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        self.max_entries = max_entries
        self._entries: dict[str, _Entry] = {}
        # Completed keys, oldest completion first
        self._completed: dict[str, None] = {}
        self._charges: dict[str, Charge] = {}
        self._lock = threading.Lock()

    def begin(self, key: str, fingerprint: Hashable) -> ChargeOutcome | None:
        """Reserve *key*, or return its recorded outcome.

        Returns ``None`` when the caller now owns the key and must call
        ``complete()`` or ``release()``.

        Raises:
            IdempotencyConflict: *key* was used with a different fingerprint.
            ChargeInProgress: *key* is reserved by a submission still running.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._entries[key] = _Entry(fingerprint)
                self._evict()
                return None
            if entry.fingerprint != fingerprint:
                msg = f"Idempotency key {key!r} was used for a different charge"
                raise IdempotencyConflict(msg)
            if entry.outcome is None:
                msg = f"A charge with idempotency key {key!r} is still being processed"
                raise ChargeInProgress(msg)
            return entry.outcome

    def complete(self, key: str, outcome: ChargeOutcome) -> None:
        """Record the final outcome for a reserved key."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                msg = f"Idempotency key {key!r} was never reserved"
                raise KeyError(msg)
            entry.outcome = outcome
            self._completed[key] = None
            if outcome.charge is not None:
                self._charges[outcome.charge.id] = outcome.charge
            self._evict()

    def release(self, key: str) -> None:
        """Forget a reserved key whose outcome is unknown."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.outcome is None:
                del self._entries[key]

    def find_charge(self, charge_id: str) -> Charge | None:
        """Look up an approved charge by its gateway id."""
        with self._lock:
            return self._charges.get(charge_id)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict(self) -> None:
        # Caller holds the lock
        while len(self._entries) > self.max_entries and self._completed:
            oldest = next(iter(self._completed))
            del self._completed[oldest]
            outcome = self._entries.pop(oldest).outcome
            if outcome is not None and outcome.charge is not None:
                self._charges.pop(outcome.charge.id, None)
