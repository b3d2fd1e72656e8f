"""Fetch official Lotto 6/45 results and update the flat data file.

Only rounds newer than the file's ``latestRound`` are fetched (all rounds
when the file is missing or has no prize data). The merged set is validated
before anything is written; the previous file is kept as ``<file>.bak``.

Usage:
  python scripts/update_data.py
  python scripts/update_data.py --latest 1210 --data data/lotto.json
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lottori.config import BaseConfig  # noqa: E402
from lottori.errors import DataIntegrityError  # noqa: E402
from lottori.repositories.lotto_result_repository import LottoResultRepository  # noqa: E402
from lottori.services.data_update_service import DataUpdateService, build_http_session  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Fetch lotto results and update the JSON data file")
    parser.add_argument("--data", dest="data_path", type=str, default=BaseConfig.LOTTO_DATA_PATH)
    parser.add_argument(
        "--latest",
        dest="latest_round",
        type=int,
        default=None,
        help="Latest round number (default: auto-detect)",
    )
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=10.0)
    parser.add_argument("--retries", dest="retries", type=int, default=3)
    parser.add_argument("--backoff", dest="backoff", type=float, default=0.5)
    parser.add_argument("--no-progress", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    service = DataUpdateService(
        LottoResultRepository(args.data_path),
        build_http_session(retries=args.retries, backoff_factor=args.backoff),
        timeout_seconds=float(args.timeout_seconds),
        show_progress=not args.no_progress,
    )

    try:
        result = service.update(latest_round=args.latest_round)
    except DataIntegrityError as exc:
        logger.error("%s (%s issues); data file left unchanged", exc.message, len(exc.details or []))
        return 1

    if result.failed_rounds:
        logger.warning("Rounds that could not be fetched: %s", result.failed_rounds)
    logger.info("%s: %s new rounds, %s total, latest %s", result.status, result.fetched, result.total, result.latest_round)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
