from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from lottori import create_app
from lottori.models.draw import Draw
from lottori.utils.kst import draw_date_for_round


def numbers_for_round(round_no: int) -> tuple[list[int], int]:
    """Six distinct main numbers plus a distinct bonus, derived from the round."""

    main = [(round_no + i * 7 - 1) % 45 + 1 for i in range(6)]
    bonus = (round_no + 41) % 45 + 1
    return sorted(main), bonus


def make_record(
    round_no: int,
    numbers: list[int] | None = None,
    bonus: int | None = None,
    *,
    draw_date: str | None = None,
    prize: int = 2_500_000_000,
    winners: int = 10,
) -> dict:
    default_numbers, default_bonus = numbers_for_round(round_no)
    nums = numbers if numbers is not None else default_numbers
    record = {
        "drwNo": round_no,
        "drwNoDate": draw_date or draw_date_for_round(round_no).isoformat(),
        "bnusNo": bonus if bonus is not None else default_bonus,
        "firstWinamnt": prize,
        "firstPrzwnerCo": winners,
        "totSellamnt": 0,
        "returnValue": "success",
    }
    for i, n in enumerate(nums, start=1):
        record[f"drwtNo{i}"] = n
    return record


def make_draw(round_no: int, numbers: list[int] | None = None, bonus: int | None = None) -> Draw:
    default_numbers, default_bonus = numbers_for_round(round_no)
    nums = sorted(numbers if numbers is not None else default_numbers)
    return Draw(
        round=round_no,
        draw_date=draw_date_for_round(round_no),
        numbers=tuple(nums),  # type: ignore[arg-type]
        bonus=bonus if bonus is not None else default_bonus,
    )


def write_data_file(path, records: list[dict], *, last_updated: datetime | None = None) -> None:
    stamp = last_updated or datetime.now(timezone.utc)
    ordered = sorted(records, key=lambda r: r["drwNo"], reverse=True)
    payload = {
        "lottery": "lotto645",
        "lastUpdated": stamp.isoformat(),
        "latestRound": ordered[0]["drwNo"] if ordered else 0,
        "draws": ordered,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def write_blog_post(blog_dir, slug: str, date: str, **extra) -> None:
    blog_dir.mkdir(parents=True, exist_ok=True)
    post = {
        "slug": slug,
        "title": extra.pop("title", f"{slug} title"),
        "description": "desc",
        "content": "본문",
        "date": date,
        "category": "analysis",
        "tags": ["lotto"],
    }
    post.update(extra)
    (blog_dir / f"{slug}.json").write_text(json.dumps(post, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def sample_records() -> list[dict]:
    return [make_record(n) for n in range(1, 31)]


@pytest.fixture
def sample_draws() -> list[Draw]:
    return [make_draw(n) for n in range(30, 0, -1)]


@pytest.fixture
def data_file(tmp_path, sample_records):
    path = tmp_path / "data" / "lotto.json"
    write_data_file(path, sample_records)
    return path


@pytest.fixture
def blog_dir(tmp_path):
    path = tmp_path / "content" / "blog"
    today = datetime.now(timezone.utc).date().isoformat()
    write_blog_post(path, "1201-prediction", today, title="1201회 예상 번호")
    write_blog_post(path, "1200-review", "2024-01-01")
    return path


@pytest.fixture
def app(tmp_path, data_file, blog_dir):
    app = create_app(
        {
            "TESTING": True,
            "DB_BACKEND": "json",
            "LOTTO_DATA_PATH": str(data_file),
            "BLOG_DIR": str(blog_dir),
            "PROJECT_ROOT": tmp_path,
            "SIMULATION_MAX_TRIALS": 5_000,
        }
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
