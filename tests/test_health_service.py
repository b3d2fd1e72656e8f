from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from lottori.repositories.blog_repository import BlogRepository
from lottori.repositories.lotto_result_repository import LottoResultRepository
from lottori.services.health_service import CheckStatus, HealthService
from tests.conftest import make_record, write_blog_post, write_data_file

NOW = datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)


@pytest.fixture
def paths(tmp_path):
    data_path = tmp_path / "data" / "lotto.json"
    blog_path = tmp_path / "content" / "blog"
    write_data_file(data_path, [make_record(n) for n in range(1, 31)], last_updated=NOW - timedelta(days=2))
    write_blog_post(blog_path, "1194-prediction", "2026-10-16")
    return data_path, blog_path


def _service(data_path, blog_path, **kwargs) -> HealthService:
    kwargs.setdefault("project_root", data_path.parent.parent)
    kwargs.setdefault("critical_files", ())
    return HealthService(LottoResultRepository(data_path), BlogRepository(blog_path), **kwargs)


def _status(report, name: str) -> CheckStatus:
    return next(c.status for c in report.checks if c.name == name)


def test_fresh_pipeline_is_healthy(paths):
    report = _service(*paths).run(NOW)

    assert report.healthy
    assert report.overall == "healthy"
    assert all(c.status is CheckStatus.PASS for c in report.checks)
    payload = report.to_dict()
    assert payload["overall"] == "healthy"
    assert {c["status"] for c in payload["checks"]} == {"pass"}


@pytest.mark.parametrize(
    "age_days,expected",
    [(6, CheckStatus.PASS), (8, CheckStatus.WARN), (11, CheckStatus.FAIL)],
)
def test_data_freshness_thresholds(paths, age_days, expected):
    data_path, blog_path = paths
    write_data_file(data_path, [make_record(n) for n in range(1, 31)], last_updated=NOW - timedelta(days=age_days))

    report = _service(data_path, blog_path).run(NOW)

    assert _status(report, "Data Freshness") is expected
    assert report.healthy is (expected is not CheckStatus.FAIL)


def test_missing_data_file_fails(paths, tmp_path):
    _, blog_path = paths
    report = _service(tmp_path / "missing.json", blog_path, project_root=tmp_path).run(NOW)

    assert _status(report, "Data Freshness") is CheckStatus.FAIL
    assert _status(report, "Data Integrity") is CheckStatus.FAIL
    assert _status(report, "Critical Files") is CheckStatus.FAIL
    assert not report.healthy


def test_corrupt_sample_fails_integrity(paths):
    data_path, blog_path = paths
    records = [make_record(n) for n in range(1, 31)]
    records[-1] = make_record(30, [1, 2, 3, 4, 5, 6], 6)
    write_data_file(data_path, records, last_updated=NOW)

    report = _service(data_path, blog_path).run(NOW)

    integrity = next(c for c in report.checks if c.name == "Data Integrity")
    assert integrity.status is CheckStatus.FAIL
    assert "Round 30" in integrity.message


def test_stale_blog_fails(paths, tmp_path):
    data_path, _ = paths
    old_blog = tmp_path / "old_blog"
    write_blog_post(old_blog, "1100-review", "2026-09-01")

    report = _service(data_path, old_blog).run(NOW)

    assert _status(report, "Blog Posts") is CheckStatus.FAIL


def test_missing_blog_directory_fails(paths, tmp_path):
    data_path, _ = paths
    report = _service(data_path, tmp_path / "nowhere").run(NOW)
    assert _status(report, "Blog Posts") is CheckStatus.FAIL


def test_missing_critical_file_is_reported(paths):
    data_path, blog_path = paths
    report = _service(data_path, blog_path, critical_files=("wsgi.py",)).run(NOW)

    check = next(c for c in report.checks if c.name == "Critical Files")
    assert check.status is CheckStatus.FAIL
    assert "wsgi.py" in check.message


def test_unknown_project_root_only_warns(paths):
    data_path, blog_path = paths
    report = HealthService(LottoResultRepository(data_path), BlogRepository(blog_path)).run(NOW)

    assert _status(report, "Critical Files") is CheckStatus.WARN
    assert report.healthy


def test_unparseable_blog_posts_fail(paths, tmp_path):
    data_path, _ = paths
    broken_blog = tmp_path / "broken_blog"
    broken_blog.mkdir()
    (broken_blog / "1195-prediction.json").write_text("{not json", encoding="utf-8")
    write_blog_post(broken_blog, "1196-prediction", "2026-10-18", title="")

    report = _service(data_path, broken_blog).run(NOW)

    blog = next(c for c in report.checks if c.name == "Blog Posts")
    assert blog.status is CheckStatus.FAIL
    assert "could be parsed" in blog.message
    assert not report.healthy
