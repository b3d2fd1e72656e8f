"""Repository layer for historical draw persistence.

The default backend is the flat JSON file produced by
``scripts/update_data.py``; ``DB_BACKEND=sql`` reads the ``lotto_results``
table instead.
"""

from __future__ import annotations

import json
import logging
import os
import pathlib
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from lottori.models.draw import Draw
from lottori.models.lotto_result import LottoResult
from lottori.schemas.lotto_result import DrawRecordSchema
from lottori.services.validation_service import DrawValidator

logger = logging.getLogger(__name__)

LOTTERY_NAME = "lotto645"


@dataclass(frozen=True)
class DrawDataset:
    """All known draws, most recent first."""

    draws: list[Draw] = field(default_factory=list)
    latest_round: int = 0
    last_updated: datetime | None = None
    lottery: str = LOTTERY_NAME

    def find(self, round_no: int) -> Draw | None:
        for d in self.draws:
            if d.round == round_no:
                return d
        return None


def parse_timestamp(raw: Any) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _latest_round(raw: Any, draws: Sequence[Draw]) -> int:
    """``latestRound`` from the file, or the newest loaded round when it is missing or unreadable."""

    fallback = draws[0].round if draws else 0
    if isinstance(raw, bool):
        return fallback
    try:
        return int(raw) if raw else fallback
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed latestRound %r", raw)
        return fallback


class LottoResultRepository:
    """Read and write historical draws."""

    def __init__(
        self,
        data_path: str | os.PathLike[str],
        session_factory: Callable[[], Session] | None = None,
    ) -> None:
        self.data_path = pathlib.Path(data_path)
        self._session_factory = session_factory
        self._schema = DrawRecordSchema()
        self._validator = DrawValidator()

    @property
    def backup_path(self) -> pathlib.Path:
        return self.data_path.with_name(self.data_path.name + ".bak")

    def load(self) -> DrawDataset:
        if self._session_factory is not None:
            with self._session_factory() as session:
                return self.load_from_session(session)
        return self.load_from_file()

    def read_raw(self) -> dict[str, Any] | None:
        """Raw file payload, or ``None`` when the file does not exist."""

        if not self.data_path.exists():
            return None
        with self.data_path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"{self.data_path} does not contain a JSON object")
        return payload

    def load_from_file(self) -> DrawDataset:
        try:
            payload = self.read_raw()
        except (OSError, ValueError):
            logger.exception("Failed to read draw data from %s", self.data_path)
            return DrawDataset()

        if payload is None:
            logger.warning("Draw data file %s not found", self.data_path)
            return DrawDataset()

        draws: list[Draw] = []
        records = payload.get("draws") if isinstance(payload.get("draws"), list) else []
        for record in records:
            try:
                draws.append(self._schema.load(record))
            except MarshmallowValidationError as exc:
                round_no = record.get("drwNo") if isinstance(record, dict) else None
                logger.warning("Skipping malformed draw record %s: %s", round_no, exc.messages)

        draws.sort(key=lambda d: d.round, reverse=True)
        latest = _latest_round(payload.get("latestRound"), draws)

        logger.info("Loaded %s draws (latest round %s) from %s", len(draws), latest, self.data_path)
        return DrawDataset(
            draws=draws,
            latest_round=latest,
            last_updated=parse_timestamp(payload.get("lastUpdated")),
            lottery=str(payload.get("lottery") or LOTTERY_NAME),
        )

    def load_from_session(self, session: Session) -> DrawDataset:
        stmt = select(LottoResult).order_by(LottoResult.draw_no.desc())
        draws: list[Draw] = []
        for row in session.scalars(stmt).all():
            main = sorted(row.main_numbers())
            draws.append(
                Draw(
                    round=int(row.draw_no),
                    draw_date=row.draw_date,
                    numbers=(main[0], main[1], main[2], main[3], main[4], main[5]),
                    bonus=int(row.bonus_number),
                    first_prize_amount=int(row.first_prize_amount or 0),
                    first_prize_winners=int(row.first_prize_winners or 0),
                )
            )
        if not draws:
            return DrawDataset()

        report = self._validator.validate_draws(draws)
        for error in report.errors:
            logger.warning("Invalid row in lotto_results: %s", error)
        valid = report.draws
        return DrawDataset(draws=valid, latest_round=valid[0].round if valid else 0)

    def to_payload(self, draws: Sequence[Draw], *, last_updated: datetime | None = None) -> dict[str, Any]:
        ordered = sorted(draws, key=lambda d: d.round, reverse=True)
        stamp = last_updated or datetime.now(timezone.utc)
        return {
            "lottery": LOTTERY_NAME,
            "lastUpdated": stamp.isoformat(),
            "latestRound": ordered[0].round if ordered else 0,
            "draws": self._schema.dump(ordered, many=True),
        }

    def save(self, draws: Sequence[Draw], *, last_updated: datetime | None = None) -> pathlib.Path:
        """Write the data file, keeping the previous version as ``.bak``."""

        payload = self.to_payload(draws, last_updated=last_updated)

        if self.data_path.exists():
            try:
                shutil.copyfile(self.data_path, self.backup_path)
                logger.info("Backup created: %s", self.backup_path)
            except OSError:
                logger.warning("Failed to create backup of %s", self.data_path, exc_info=True)

        self.data_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.data_path.with_name(self.data_path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, separators=(",", ":"))
        os.replace(tmp, self.data_path)
        return self.data_path

    def replace_all(self, session: Session, draws: Sequence[Draw]) -> int:
        """Upsert draws into the SQL table."""

        for draw in draws:
            session.merge(LottoResult.from_draw(draw))
        session.flush()
        return len(draws)
