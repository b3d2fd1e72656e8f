from __future__ import annotations

import json
import re

import pytest
import requests

from lottori.errors import DataIntegrityError
from lottori.repositories.lotto_result_repository import LottoResultRepository
from lottori.services.data_update_service import DataUpdateService
from lottori.utils.kst import draw_date_for_round
from tests.conftest import make_record, numbers_for_round, write_data_file


class FakeResponse:
    def __init__(self, status_code: int, payload: dict | None = None) -> None:
        self.status_code = status_code
        self._payload = payload or {}

    def json(self) -> dict:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeFeed:
    """Stands in for the requests session; serves rounds 1..latest."""

    def __init__(self, latest: int, overrides: dict[int, dict] | None = None) -> None:
        self.latest = latest
        self.overrides = overrides or {}
        self.requested: list[int] = []

    def payload(self, draw_no: int) -> dict:
        if draw_no in self.overrides:
            return self.overrides[draw_no]
        numbers, bonus = numbers_for_round(draw_no)
        return {
            "draw_no": draw_no,
            "numbers": list(reversed(numbers)),
            "bonus_no": bonus,
            "date": f"{draw_date_for_round(draw_no).isoformat()}T11:50:00Z",
            "divisions": [{"prize": 1_500_000_000 + draw_no, "winners": 7}],
        }

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        draw_no = int(re.search(r"/(\d+)\.json$", url).group(1))
        self.requested.append(draw_no)
        if draw_no > self.latest:
            return FakeResponse(404)
        return FakeResponse(200, self.payload(draw_no))


def _service(path, feed) -> DataUpdateService:
    return DataUpdateService(LottoResultRepository(path), feed)  # type: ignore[arg-type]


@pytest.mark.parametrize("latest,hint", [(37, 10), (1, 10), (500, 1200), (1200, 1200)])
def test_find_latest_round(tmp_path, latest, hint):
    service = _service(tmp_path / "lotto.json", FakeFeed(latest))
    assert service.find_latest_round(start_hint=hint) == latest


def test_fetch_record_maps_feed_fields(tmp_path):
    record = _service(tmp_path / "lotto.json", FakeFeed(5)).fetch_record(3)
    numbers, bonus = numbers_for_round(3)

    assert record["drwNo"] == 3
    assert record["drwNoDate"] == draw_date_for_round(3).isoformat()
    assert [record[f"drwtNo{i}"] for i in range(1, 7)] == numbers
    assert record["bnusNo"] == bonus
    assert record["firstWinamnt"] == 1_500_000_003
    assert record["firstPrzwnerCo"] == 7
    assert "totSellamnt" not in record


def test_full_fetch_into_empty_file(tmp_path):
    path = tmp_path / "data" / "lotto.json"
    feed = FakeFeed(5)

    result = _service(path, feed).update(latest_round=5)

    assert result.status == "updated"
    assert result.fetched == 5
    assert result.latest_round == 5
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [r["drwNo"] for r in payload["draws"]] == [5, 4, 3, 2, 1]


def test_incremental_fetch_only_requests_new_rounds(tmp_path):
    path = tmp_path / "lotto.json"
    write_data_file(path, [make_record(n) for n in range(1, 4)])
    feed = FakeFeed(5)

    result = _service(path, feed).update(latest_round=5)

    assert feed.requested == [4, 5]
    assert result.total == 5
    assert LottoResultRepository(path).backup_path.exists()


def test_up_to_date_file_is_left_alone(tmp_path):
    path = tmp_path / "lotto.json"
    write_data_file(path, [make_record(n) for n in range(1, 6)])
    before = path.read_text(encoding="utf-8")
    feed = FakeFeed(5)

    result = _service(path, feed).update(latest_round=5)

    assert result.status == "up_to_date"
    assert feed.requested == []
    assert path.read_text(encoding="utf-8") == before


def test_missing_prize_data_forces_full_refetch(tmp_path):
    path = tmp_path / "lotto.json"
    write_data_file(path, [make_record(n, prize=0) for n in range(1, 4)])
    feed = FakeFeed(4)

    _service(path, feed).update(latest_round=4)

    assert feed.requested == [1, 2, 3, 4]


def test_integrity_failure_leaves_file_untouched(tmp_path):
    path = tmp_path / "lotto.json"
    write_data_file(path, [make_record(n) for n in range(1, 3)])
    before = path.read_text(encoding="utf-8")
    corrupt = {"draw_no": 3, "numbers": [1, 1, 2, 3, 4, 5], "bonus_no": 9, "date": "2002-12-21"}
    feed = FakeFeed(3, overrides={3: corrupt})

    with pytest.raises(DataIntegrityError) as exc_info:
        _service(path, feed).update(latest_round=3)

    assert any("Round 3" in e for e in exc_info.value.details)
    assert path.read_text(encoding="utf-8") == before


def test_unfetchable_round_is_reported_as_gap(tmp_path):
    path = tmp_path / "lotto.json"
    feed = FakeFeed(4, overrides={2: {"numbers": "bad"}})

    with pytest.raises(DataIntegrityError) as exc_info:
        _service(path, feed).update(latest_round=4)

    assert "Missing round(s) between 1 and 3" in exc_info.value.details
    assert not path.exists()
