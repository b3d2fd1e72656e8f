"""Integrity checks for historical draw records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError

from lottori.models.draw import Draw
from lottori.schemas.lotto_result import DrawRecordSchema


@dataclass(frozen=True)
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    draws: list[Draw] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def _flatten_messages(messages: Any, prefix: str = "") -> list[str]:
    if isinstance(messages, Mapping):
        out: list[str] = []
        for key, value in messages.items():
            label = "" if key == "_schema" else str(key)
            out.extend(_flatten_messages(value, label or prefix))
        return out
    if isinstance(messages, (list, tuple)):
        out = []
        for m in messages:
            out.extend(_flatten_messages(m, prefix))
        return out
    return [f"{prefix}: {messages}" if prefix else str(messages)]


class DrawValidator:
    """Validate raw draw records without raising.

    Every problem is reported as a human readable line; records that pass are
    returned as :class:`Draw` objects in the order they were given.
    """

    def __init__(self) -> None:
        self._schema = DrawRecordSchema()

    def validate(self, records: Iterable[Mapping[str, Any]], *, check_sequence: bool = True) -> ValidationReport:
        errors: list[str] = []
        draws: list[Draw] = []
        rounds: list[int] = []
        seen = 0

        for record in records:
            seen += 1
            if not isinstance(record, Mapping):
                errors.append(f"Record {seen}: not an object")
                continue

            label = record.get("drwNo", f"#{seen}")
            if isinstance(label, int) and not isinstance(label, bool):
                rounds.append(label)

            try:
                draw = self._schema.load(record)
            except MarshmallowValidationError as exc:
                for message in _flatten_messages(exc.messages):
                    errors.append(f"Round {label}: {message}")
                continue
            draws.append(draw)

        if seen == 0:
            return ValidationReport(errors=["No draws found"], draws=[])

        if check_sequence:
            errors.extend(self._sequence_errors(rounds))
        return ValidationReport(errors=errors, draws=draws)

    @staticmethod
    def _sequence_errors(rounds: list[int]) -> list[str]:
        errors: list[str] = []
        ordered = sorted(rounds)
        for prev, cur in zip(ordered, ordered[1:]):
            if cur == prev:
                errors.append(f"Duplicate round {cur}")
            elif cur != prev + 1:
                errors.append(f"Missing round(s) between {prev} and {cur}")
        return errors

    def validate_draws(self, draws: Iterable[Draw]) -> ValidationReport:
        """Re-check already loaded draws (e.g. rows from the SQL backend)."""

        return self.validate(self._schema.dump(list(draws), many=True))
