"""
View state for the converter UI: input box, result rows, error line and a
live "current unix timestamp" clock.

Requests are numbered. When input changes faster than resolution completes,
only the most recently issued request may update the view; older
completions are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .client import Outcome, Transport
from .clock import Clock, SystemClock
from .schemas import ResolvedTimeOut

COPY_ACK_MS = 1200
COPIED_LABEL = "copied!"


@dataclass(frozen=True)
class Row:
    label: str
    value: str
    copied: bool = False

    @property
    def display(self) -> str:
        return COPIED_LABEL if self.copied else self.value


def format_date_fields(result: ResolvedTimeOut) -> str:
    d = result.date
    return f"{d.year}-{d.month:02d}-{d.day:02d} {d.hour:02d}:{d.minute:02d}:{d.second:02d}"


def _row_values(result: ResolvedTimeOut) -> List[tuple]:
    return [
        ("unix", str(result.unix)),
        ("unix_ms", str(result.unix_ms)),
        ("iso", result.iso),
        ("utc", result.utc),
        ("relative", result.relative),
        ("date", format_date_fields(result)),
    ]


# PUBLIC_INTERFACE
class Presenter:
    """
    Holds and updates the converter's view state.

    Usage:
        presenter = Presenter(LocalTransport())
        presenter.mount()
        presenter.set_input("1700000000")
        print(presenter.render())
    """

    def __init__(self, transport: Transport, clock: Optional[Clock] = None) -> None:
        self._transport = transport
        self._clock = clock or SystemClock()
        self.input = ""
        self.result: Optional[ResolvedTimeOut] = None
        self.error: Optional[str] = None
        self.now_display = self._clock.now_ms() // 1000
        self._latest_seq = 0
        self._copied_until: Dict[str, int] = {}

    def mount(self) -> bool:
        """Start the live clock and resolve the current input ("now" when empty)."""
        self.tick()
        return self.refresh()

    def set_input(self, text: str) -> bool:
        self.input = text
        return self.refresh()

    def refresh(self) -> bool:
        seq = self.begin()
        return self.complete(seq, self._transport.fetch(self.input or None))

    def begin(self) -> int:
        """Issue a new request number; it supersedes every earlier one."""
        self._latest_seq += 1
        return self._latest_seq

    def complete(self, seq: int, outcome: Outcome) -> bool:
        """
        Apply `outcome` if `seq` is still the latest request.

        Returns:
            True if the view was updated, False if the outcome was stale.
        """
        if seq != self._latest_seq:
            return False
        if outcome.ok:
            self.result = outcome.result
            self.error = None
        else:
            self.result = None
            self.error = outcome.error
        return True

    def tick(self) -> int:
        """Advance the live clock display; called once per second by the host UI."""
        self.now_display = self._clock.now_ms() // 1000
        return self.now_display

    def rows(self) -> List[Row]:
        if self.result is None:
            return []
        now = self._clock.now_ms()
        self._copied_until = {k: v for k, v in self._copied_until.items() if v > now}
        return [
            Row(label=label, value=value, copied=label in self._copied_until)
            for label, value in _row_values(self.result)
        ]

    def copy(self, label: str) -> str:
        """
        Return the value of row `label` and show the copy acknowledgment on it
        for COPY_ACK_MS. Writing to the system clipboard is left to the host UI.
        """
        for row in self.rows():
            if row.label == label:
                self._copied_until[label] = self._clock.now_ms() + COPY_ACK_MS
                return row.value
        raise KeyError(label)

    def render(self) -> str:
        lines = [str(self.now_display), "current unix timestamp", ""]
        if self.error:
            lines.append(self.error)
        for row in self.rows():
            lines.append(f"{row.label:<10}{row.display}")
        return "\n".join(lines)
