"""Health checks for the data pipeline: freshness, integrity, blog, files."""

from __future__ import annotations

import logging
import os
import pathlib
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum

from lottori.repositories.blog_repository import BlogRepository
from lottori.repositories.lotto_result_repository import LottoResultRepository, parse_timestamp
from lottori.services.validation_service import DrawValidator

logger = logging.getLogger(__name__)

DATA_WARN_DAYS = 7
DATA_FAIL_DAYS = 10
BLOG_FAIL_DAYS = 14
INTEGRITY_SAMPLE = 10

DEFAULT_CRITICAL_FILES = (
    "pyproject.toml",
    "wsgi.py",
    "lottori/__init__.py",
    "lottori/config.py",
    "lottori/services/simulation_service.py",
    "lottori/services/tax_service.py",
    "lottori/services/frequency_analysis_service.py",
)


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class CheckResult:
    name: str
    status: CheckStatus
    message: str


@dataclass(frozen=True)
class HealthReport:
    timestamp: datetime
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return not any(c.status is CheckStatus.FAIL for c in self.checks)

    @property
    def overall(self) -> str:
        return "healthy" if self.healthy else "unhealthy"

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "overall": self.overall,
            "checks": [{**asdict(c), "status": c.status.value} for c in self.checks],
        }


def _days_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 86_400


class HealthService:
    """Run every check and collect the results; no check ever raises."""

    def __init__(
        self,
        repository: LottoResultRepository,
        blog_repository: BlogRepository,
        *,
        project_root: str | os.PathLike[str] | None = None,
        critical_files: Sequence[str] = DEFAULT_CRITICAL_FILES,
    ) -> None:
        self._repo = repository
        self._blog = blog_repository
        self._root = pathlib.Path(project_root) if project_root is not None else None
        self._critical_files = tuple(critical_files)
        self._validator = DrawValidator()

    def run(self, now: datetime | None = None) -> HealthReport:
        now = now or datetime.now(timezone.utc)
        checks = [
            self.check_data_freshness(now),
            self.check_data_integrity(),
            self.check_blog_posts(now),
            self.check_critical_files(),
        ]
        report = HealthReport(timestamp=now, checks=checks)
        if not report.healthy:
            logger.warning("Health check failed: %s", [c.name for c in checks if c.status is CheckStatus.FAIL])
        return report

    def check_data_freshness(self, now: datetime) -> CheckResult:
        name = "Data Freshness"
        try:
            payload = self._repo.read_raw()
        except (OSError, ValueError) as exc:
            return CheckResult(name, CheckStatus.FAIL, f"Cannot read data file: {exc}")
        if payload is None:
            return CheckResult(name, CheckStatus.FAIL, f"Data file {self._repo.data_path} not found.")

        last_updated = parse_timestamp(payload.get("lastUpdated"))
        if last_updated is None:
            return CheckResult(name, CheckStatus.FAIL, "Data file has no valid lastUpdated timestamp.")

        days = int(_days_between(last_updated, now))
        stamp = payload.get("lastUpdated")
        if _days_between(last_updated, now) > DATA_FAIL_DAYS:
            return CheckResult(
                name,
                CheckStatus.FAIL,
                f"Data is {days} days old (last updated: {stamp}). Max allowed: {DATA_FAIL_DAYS} days.",
            )
        if _days_between(last_updated, now) > DATA_WARN_DAYS:
            return CheckResult(name, CheckStatus.WARN, f"Data is {days} days old (last updated: {stamp}).")

        draws = payload.get("draws") or []
        return CheckResult(
            name,
            CheckStatus.PASS,
            f"Data updated {days} days ago. Latest round: {payload.get('latestRound')}. Total draws: {len(draws)}.",
        )

    def check_data_integrity(self) -> CheckResult:
        name = "Data Integrity"
        try:
            payload = self._repo.read_raw()
        except (OSError, ValueError) as exc:
            return CheckResult(name, CheckStatus.FAIL, f"Cannot validate data: {exc}")

        draws = (payload or {}).get("draws") or []
        if not isinstance(draws, list) or not draws:
            return CheckResult(name, CheckStatus.FAIL, "No draws found in data file.")

        sample = draws[:INTEGRITY_SAMPLE] + draws[-INTEGRITY_SAMPLE:]
        report = self._validator.validate(sample, check_sequence=False)
        if not report.valid:
            return CheckResult(
                name,
                CheckStatus.FAIL,
                f"Found {len(report.errors)} integrity issues: {'; '.join(report.errors[:3])}",
            )

        return CheckResult(
            name,
            CheckStatus.PASS,
            f"All sampled draws valid. {len(draws)} total draws, rounds 1-{payload.get('latestRound')}.",
        )

    def check_blog_posts(self, now: datetime) -> CheckResult:
        name = "Blog Posts"
        if not self._blog.blog_dir.is_dir():
            return CheckResult(name, CheckStatus.FAIL, "Blog directory does not exist.")

        files = self._blog.list_files()
        if not files:
            return CheckResult(name, CheckStatus.FAIL, "No blog posts found.")

        posts = self._blog.load_all()
        if not posts:
            return CheckResult(name, CheckStatus.FAIL, f"None of the {len(files)} blog post files could be parsed.")

        if len(posts) < len(files):
            logger.warning("%s of %s blog post files are invalid", len(files) - len(posts), len(files))

        latest = posts[0]["date"]
        latest_at = datetime(latest.year, latest.month, latest.day, tzinfo=timezone.utc)
        age = _days_between(latest_at, now)
        if age > BLOG_FAIL_DAYS:
            return CheckResult(
                name,
                CheckStatus.FAIL,
                f"Latest blog post is {int(age)} days old ({latest.isoformat()}). "
                f"Max allowed: {BLOG_FAIL_DAYS} days. Total posts: {len(files)}.",
            )
        return CheckResult(name, CheckStatus.PASS, f"{len(files)} blog posts found. Latest: {latest.isoformat()}.")

    def check_critical_files(self) -> CheckResult:
        name = "Critical Files"
        if self._root is None:
            return CheckResult(name, CheckStatus.WARN, "Project root unknown; critical files not checked.")

        required = [self._repo.data_path, *(self._root / f for f in self._critical_files)]
        missing = [str(p) for p in required if not p.exists()]
        if missing:
            return CheckResult(
                name,
                CheckStatus.FAIL,
                f"Missing {len(missing)} critical files: {', '.join(missing)}",
            )
        return CheckResult(name, CheckStatus.PASS, f"All {len(required)} critical files present.")
