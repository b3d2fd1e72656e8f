"""Validate the automation pipeline: data freshness, integrity, blog, files.

Prints a human readable summary followed by a JSON report and exits with
status 1 when any check fails.

Usage:
  python scripts/health_check.py
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lottori.config import BaseConfig  # noqa: E402
from lottori.repositories.blog_repository import BlogRepository  # noqa: E402
from lottori.repositories.lotto_result_repository import LottoResultRepository  # noqa: E402
from lottori.services.health_service import CheckStatus, HealthService  # noqa: E402

_ICONS = {CheckStatus.PASS: "[PASS]", CheckStatus.WARN: "[WARN]", CheckStatus.FAIL: "[FAIL]"}


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Run pipeline health checks")
    parser.add_argument("--data", dest="data_path", type=str, default=BaseConfig.LOTTO_DATA_PATH)
    parser.add_argument("--blog-dir", dest="blog_dir", type=str, default=BaseConfig.BLOG_DIR)
    parser.add_argument("--json-only", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(levelname)s %(message)s")

    service = HealthService(
        LottoResultRepository(args.data_path),
        BlogRepository(args.blog_dir),
        project_root=PROJECT_ROOT,
    )
    report = service.run()

    if not args.json_only:
        for check in report.checks:
            print(f"{_ICONS[check.status]} {check.name}: {check.message}")
        print(f"\nOverall: {report.overall.upper()}\n")

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0 if report.healthy else 1


if __name__ == "__main__":
    raise SystemExit(main())
