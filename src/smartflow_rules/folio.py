"""Folio numbering for clinical records.

A folio identifies one clinical record, e.g. ``AD-OCT26-0007`` for the
seventh adult record of October 2026.  Sequences restart every month and are
kept per form type; they come from an injected :class:`SequenceCounter` so
that the host decides where the counters live.

Formats:

    generate()              <TYPE>-<MON><YY>-<NNNN>
    generate_for_patient()  <TYPE>-<INITIALS><AGE GROUP>-<MON><YY>-<NNN>

``stats()`` sums the counter's sequences per form type and per month.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable

from pydantic import BaseModel

from smartflow_rules.interfaces import SequenceCounter
from smartflow_rules.models.enums import FormType

_TYPE_PREFIXES: dict[FormType, str] = {
    FormType.ADULTO: "AD",
    FormType.PEDIATRICO: "PE",
    FormType.EVOLUCION: "EV",
}

_MONTH_CODES = [
    "ENE", "FEB", "MAR", "ABR", "MAY", "JUN",
    "JUL", "AGO", "SEP", "OCT", "NOV", "DIC",
]


class Folio(BaseModel):
    folio: str
    timestamp: datetime
    form_type: FormType
    sequence: int


class FolioStats(BaseModel):
    """Folios issued so far, summed from the counter's sequences.

    ``by_month`` is keyed ``"<month>/<year>"``; ``current_month`` covers the
    generator clock's month only.
    """

    total: int = 0
    by_type: dict[FormType, int] = {}
    by_month: dict[str, int] = {}
    current_month: dict[FormType, int] = {}


class InMemorySequenceCounter(SequenceCounter):
    """Process-local counter; values are lost on restart."""

    def __init__(self) -> None:
        self._values: dict[str, int] = {}
        self._lock = threading.Lock()

    def next_value(self, key: str) -> int:
        with self._lock:
            value = self._values.get(key, 0) + 1
            self._values[key] = value
            return value

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._values)


def age_group(age: int) -> str:
    """Two-letter age band used in patient folios."""
    if age < 1:
        return "RN"  # recién nacido
    if age < 12:
        return "IN"
    if age < 65:
        return "AD"
    return "GE"


def initials(name: str) -> str:
    return "".join(word[0].upper() for word in name.split() if word)[:3]


class FolioGenerator:
    """Builds folios from a counter and a clock.

    Args:
        counter: source of per-month, per-form-type sequence numbers
        clock: returns the current time; defaults to local ``datetime.now``
    """

    def __init__(
        self,
        counter: SequenceCounter,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._counter = counter
        self._clock = clock or datetime.now

    def generate(self, form_type: FormType | str) -> Folio:
        form_type = FormType(form_type)
        now = self._clock()
        sequence = self._counter.next_value(f"{form_type.value}_{now.year}_{now.month}")
        folio = f"{_TYPE_PREFIXES[form_type]}-{self._period(now)}-{sequence:04d}"
        return Folio(folio=folio, timestamp=now, form_type=form_type, sequence=sequence)

    def generate_for_patient(
        self,
        form_type: FormType | str,
        name: str | None = None,
        age: int | None = None,
    ) -> Folio:
        """Folio with patient initials and age band when both are known."""
        base = self.generate(form_type)
        if not name or not name.strip() or age is None:
            return base

        folio = (
            f"{_TYPE_PREFIXES[base.form_type]}-{initials(name)}{age_group(age)}"
            f"-{self._period(base.timestamp)}-{base.sequence:03d}"
        )
        return base.model_copy(update={"folio": folio})

    def stats(self) -> FolioStats:
        """Totals per form type and month from the counter's sequences."""
        now = self._clock()
        stats = FolioStats(
            by_type={t: 0 for t in FormType},
            current_month={t: 0 for t in FormType},
        )
        for key, count in self._counter.snapshot().items():
            type_name, year, month = key.split("_")
            form_type = FormType(type_name)
            stats.total += count
            stats.by_type[form_type] += count
            month_key = f"{int(month)}/{int(year)}"
            stats.by_month[month_key] = stats.by_month.get(month_key, 0) + count
            if int(year) == now.year and int(month) == now.month:
                stats.current_month[form_type] += count
        return stats

    @staticmethod
    def _period(moment: datetime) -> str:
        return f"{_MONTH_CODES[moment.month - 1]}{moment.year % 100:02d}"
