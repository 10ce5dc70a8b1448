# Group food order: one active order at a time with per-user submissions

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum


class OrderState(Enum):
    CLOSED = "closed"
    OPEN = "open"


class Outcome(Enum):
    OPENED = "opened"
    UPDATED = "updated"
    NOT_OVERWRITING = "not_overwriting"
    MISSING_DESCRIPTION = "missing_description"
    SUBMITTED = "submitted"
    NOTHING_TO_SUBMIT = "nothing_to_submit"
    NO_ACTIVE_ORDER = "no_active_order"
    LISTED = "listed"
    CLOSED = "closed"
    NOT_OWNER = "not_owner"


@dataclass(frozen=True)
class OrderResult:
    """What a ledger operation did, plus a snapshot of the order for the reply."""
    outcome: Outcome
    owner: str = ""
    description: str = ""
    submissions: list[tuple[str, str]] = field(default_factory=list)


class OrderLedger:
    """Holds the single active group order.

    Closed: owner and description empty. Open: both non-empty.
    Each operation is one locked read-modify-write.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.owner = ""
        self.description = ""
        self.submissions: dict[str, str] = {}

    @property
    def state(self) -> OrderState:
        return OrderState.OPEN if self.description else OrderState.CLOSED

    def _listing(self) -> list[tuple[str, str]]:
        return sorted(self.submissions.items())

    def _result(self, outcome: Outcome, **kwargs) -> OrderResult:
        kwargs.setdefault("owner", self.owner)
        kwargs.setdefault("description", self.description)
        return OrderResult(outcome, **kwargs)

    def open(self, user: str, text: str) -> OrderResult:
        text = text.strip()
        with self._lock:
            if self.state is OrderState.OPEN:
                if user != self.owner:
                    return self._result(Outcome.NOT_OVERWRITING)
                if not text:
                    return self._result(Outcome.MISSING_DESCRIPTION)
                self.description = text
                logging.info(f"Order of {user} updated: {text}")
                return self._result(Outcome.UPDATED)

            if not text:
                return self._result(Outcome.MISSING_DESCRIPTION)
            self.owner = user
            self.description = text
            self.submissions = {}
            logging.info(f"Order opened by {user}: {text}")
            return self._result(Outcome.OPENED)

    def submit(self, user: str, text: str) -> OrderResult:
        # "|" would break the listing table
        item = text.replace("|", "").strip()
        with self._lock:
            if self.state is OrderState.CLOSED:
                return self._result(Outcome.NO_ACTIVE_ORDER)
            if not item:
                return self._result(Outcome.NOTHING_TO_SUBMIT)
            self.submissions[user] = item
            logging.info(f"Order submission by {user}: {item}")
            return self._result(Outcome.SUBMITTED, submissions=[(user, item)])

    def list(self) -> OrderResult:
        with self._lock:
            if self.state is OrderState.CLOSED:
                return self._result(Outcome.NO_ACTIVE_ORDER)
            return self._result(Outcome.LISTED, submissions=self._listing())

    def close(self, user: str) -> OrderResult:
        with self._lock:
            if self.state is OrderState.CLOSED:
                return self._result(Outcome.NO_ACTIVE_ORDER)
            if user != self.owner:
                return self._result(Outcome.NOT_OWNER)
            result = self._result(Outcome.CLOSED, submissions=self._listing())
            self.owner = ""
            self.description = ""
            self.submissions = {}
            logging.info(f"Order of {user} closed with {len(result.submissions)} submissions")
            return result
