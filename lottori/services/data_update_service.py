"""Incremental update of the historical draw file from the public results feed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from tqdm import tqdm
from urllib3.util.retry import Retry

from lottori.errors import DataIntegrityError
from lottori.repositories.lotto_result_repository import LottoResultRepository
from lottori.services.validation_service import DrawValidator
from lottori.utils.kst import draw_date_for_round

logger = logging.getLogger(__name__)

RESULTS_URL = "https://smok95.github.io/lotto/results/{draw_no}.json"
LATEST_ROUND_HINT = 1200
MAX_ROUND = 100_000


def build_http_session(retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)

    session = requests.Session()
    session.headers.update({"User-Agent": "Mozilla/5.0"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _feed_date(payload: dict[str, Any], draw_no: int) -> str:
    raw = payload.get("date")
    if isinstance(raw, str) and len(raw) >= 10:
        return raw[:10]
    return draw_date_for_round(draw_no).isoformat()


def _first_division(payload: dict[str, Any]) -> tuple[int, int]:
    divisions = payload.get("divisions")
    if isinstance(divisions, list) and divisions and isinstance(divisions[0], dict):
        first = divisions[0]
        return int(first.get("prize") or 0), int(first.get("winners") or 0)
    return 0, 0


@dataclass(frozen=True)
class UpdateResult:
    status: str  # "up_to_date" | "updated"
    latest_round: int
    fetched: int = 0
    total: int = 0
    failed_rounds: list[int] = field(default_factory=list)


class DataUpdateService:
    """Fetch missing rounds, validate the merged set and rewrite the data file."""

    def __init__(
        self,
        repository: LottoResultRepository,
        http: requests.Session | None = None,
        *,
        timeout_seconds: float = 10.0,
        results_url: str = RESULTS_URL,
        show_progress: bool = False,
    ) -> None:
        self._repo = repository
        self._http = http or build_http_session()
        self._timeout = timeout_seconds
        self._url = results_url
        self._show_progress = show_progress
        self._validator = DrawValidator()

    def fetch_record(self, draw_no: int) -> dict[str, Any]:
        """Fetch one round and convert it to the data file record layout."""

        resp = self._http.get(self._url.format(draw_no=draw_no), timeout=self._timeout)
        resp.raise_for_status()
        payload: dict[str, Any] = resp.json()

        numbers = payload.get("numbers")
        bonus = payload.get("bonus_no")

        if not isinstance(numbers, list) or len(numbers) != 6:
            raise ValueError(f"Invalid numbers for draw {draw_no}: {numbers}")
        if not isinstance(bonus, int):
            raise ValueError(f"Invalid bonus for draw {draw_no}: {bonus}")

        nums = sorted(int(n) for n in numbers)
        prize, winners = _first_division(payload)
        return {
            "drwNo": int(draw_no),
            "drwNoDate": _feed_date(payload, draw_no),
            "drwtNo1": nums[0],
            "drwtNo2": nums[1],
            "drwtNo3": nums[2],
            "drwtNo4": nums[3],
            "drwtNo5": nums[4],
            "drwtNo6": nums[5],
            "bnusNo": int(bonus),
            "firstWinamnt": prize,
            "firstPrzwnerCo": winners,
        }

    def draw_exists(self, draw_no: int) -> bool:
        resp = self._http.get(self._url.format(draw_no=draw_no), timeout=self._timeout)

        if resp.status_code == 200:
            return True
        if resp.status_code == 404:
            return False

        resp.raise_for_status()
        return True

    def find_latest_round(self, *, start_hint: int = LATEST_ROUND_HINT) -> int:
        """Exponential probe from ``start_hint`` followed by binary search."""

        if start_hint < 1:
            start_hint = 1

        if not self.draw_exists(1):
            raise RuntimeError("Lotto data source returned 404 for draw 1")

        low = 1
        high = start_hint

        if self.draw_exists(high):
            low = high
            while True:
                next_high = high * 2
                if next_high > MAX_ROUND:
                    raise RuntimeError("Failed to find upper bound for latest draw (cap exceeded)")
                high = next_high
                if not self.draw_exists(high):
                    break
                low = high

        lo = low
        hi = high
        while lo + 1 < hi:
            mid = (lo + hi) // 2
            if self.draw_exists(mid):
                lo = mid
            else:
                hi = mid

        return lo

    def _fetch_rounds(self, rounds: Iterable[int]) -> tuple[list[dict[str, Any]], list[int]]:
        fetched: list[dict[str, Any]] = []
        failed: list[int] = []
        rounds = list(rounds)
        for draw_no in tqdm(rounds, desc="rounds", unit="draw", disable=not self._show_progress):
            try:
                fetched.append(self.fetch_record(draw_no))
            except (requests.RequestException, ValueError):
                logger.warning("Failed to fetch round %s", draw_no, exc_info=True)
                failed.append(draw_no)
        return fetched, failed

    def update(self, *, latest_round: int | None = None, now: datetime | None = None) -> UpdateResult:
        latest = int(latest_round) if latest_round is not None else self.find_latest_round()
        logger.info("Latest round: %s", latest)

        existing = self._repo.read_raw() or {}
        existing_records = [r for r in existing.get("draws") or [] if isinstance(r, dict)]
        start = 1

        if existing_records:
            has_prize_data = any(int(r.get("firstWinamnt") or 0) > 0 for r in existing_records)
            existing_latest = int(existing.get("latestRound") or 0)
            if not has_prize_data:
                logger.warning("Prize amount data is missing. Re-fetching all rounds...")
                existing_records = []
            elif existing_latest >= latest:
                logger.info("Data is already up to date")
                return UpdateResult(status="up_to_date", latest_round=existing_latest, total=len(existing_records))
            else:
                start = existing_latest + 1
                logger.info("Existing data: %s rounds (up to %s)", len(existing_records), existing_latest)

        logger.info("Fetching rounds %s to %s", start, latest)
        new_records, failed = self._fetch_rounds(range(start, latest + 1))

        merged: dict[int, dict[str, Any]] = {}
        for record in [*existing_records, *new_records]:
            merged[record.get("drwNo")] = record  # type: ignore[index]

        report = self._validator.validate(merged.values())
        if not report.valid:
            for err in report.errors:
                logger.error("  - %s", err)
            raise DataIntegrityError(message="Data validation failed", details=report.errors)

        path = self._repo.save(report.draws, last_updated=now)
        logger.info("Saved %s rounds to %s", len(report.draws), path)

        return UpdateResult(
            status="updated",
            latest_round=max(d.round for d in report.draws),
            fetched=len(new_records),
            total=len(report.draws),
            failed_rounds=failed,
        )
