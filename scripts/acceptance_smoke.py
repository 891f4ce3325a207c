"""
Acceptance smoke checks for kotonoha.

Usage:
  DATABASE_URL=sqlite:///./data/acceptance_kotonoha.db PYTHONPATH=src python scripts/acceptance_smoke.py
  DATABASE_URL=sqlite:///./data/acceptance_kotonoha.db PYTHONPATH=src python scripts/acceptance_smoke.py --with-external
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from typing import Callable

from fastapi.testclient import TestClient


@dataclass
class CheckResult:
    name: str
    passed: bool
    detail: str


def _ok(name: str, detail: str) -> CheckResult:
    return CheckResult(name=name, passed=True, detail=detail)


def _fail(name: str, detail: str) -> CheckResult:
    return CheckResult(name=name, passed=False, detail=detail)


def run_check(name: str, fn: Callable[[], CheckResult]) -> CheckResult:
    try:
        return fn()
    except Exception as exc:  # pragma: no cover - smoke tool
        return _fail(name, f"exception: {exc}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run acceptance smoke checks.")
    parser.add_argument(
        "--with-external",
        action="store_true",
        help="Run checks that call the external LLM API.",
    )
    args = parser.parse_args()

    database_url = os.getenv("DATABASE_URL", "sqlite:///./data/acceptance_kotonoha.db")
    os.environ["DATABASE_URL"] = database_url
    os.environ.setdefault("OPENAI_API_KEY", "smoke-placeholder-key")

    from kotonoha.core.database import engine, create_tables
    from kotonoha.main import app
    from kotonoha.seed import seed_demo_data

    # Ensure tables and demo records exist for the acceptance database.
    create_tables(engine)
    seed_demo_data(engine)

    client = TestClient(app)
    results: list[CheckResult] = []

    def check_root() -> CheckResult:
        resp = client.get("/")
        if resp.status_code != 200:
            return _fail("GET /", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("GET /", "healthy")

    def check_health() -> CheckResult:
        resp = client.get("/health")
        if resp.status_code != 200:
            return _fail("GET /health", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("GET /health", "healthy")

    def check_preflight() -> CheckResult:
        resp = client.options("/api/generate")
        if resp.status_code != 200 or resp.content:
            return _fail("OPTIONS /api/generate", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("OPTIONS /api/generate", "empty 200")

    def check_validation() -> CheckResult:
        resp = client.post("/api/generate", json={"styleSlug": "pana_emotion"})
        if resp.status_code != 400 or "error" not in resp.json():
            return _fail("POST /api/generate (invalid)", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("POST /api/generate (invalid)", resp.json()["error"])

    def check_unknown_style() -> CheckResult:
        resp = client.post(
            "/api/generate",
            json={
                "styleSlug": "smoke-missing-style",
                "contentType": "diary_logic",
                "selectedKeywords": [],
            },
        )
        if resp.status_code != 404:
            return _fail("POST /api/generate (missing style)", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("POST /api/generate (missing style)", resp.json()["error"])

    def check_suggestions_validation() -> CheckResult:
        resp = client.post("/api/suggestions", json={"methodId": "teaser"})
        if resp.status_code != 400 or "error" not in resp.json():
            return _fail("POST /api/suggestions (invalid)", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("POST /api/suggestions (invalid)", resp.json()["error"])

    def check_generate_external() -> CheckResult:
        payload = {
            "contentType": "board_template",
            "conceptId": "healing",
            "selectedKeywords": ["カフェ", "週末"],
            "patternCount": 3,
        }
        resp = client.post("/api/generate", json=payload)
        if resp.status_code != 200:
            return _fail("POST /api/generate", f"status={resp.status_code}, body={resp.text[:300]}")
        data = resp.json()
        titles = [p["title"] for p in data.get("structuredPatterns", [])]
        return _ok(
            "POST /api/generate",
            f"model={data.get('model')}, titles={json.dumps(titles, ensure_ascii=False)[:200]}",
        )

    # Always-run checks.
    results.append(run_check("GET /", check_root))
    results.append(run_check("GET /health", check_health))
    results.append(run_check("OPTIONS /api/generate", check_preflight))
    results.append(run_check("POST /api/generate (invalid)", check_validation))
    results.append(run_check("POST /api/generate (missing style)", check_unknown_style))
    results.append(run_check("POST /api/suggestions (invalid)", check_suggestions_validation))

    # Optional external checks.
    if args.with_external:
        results.append(run_check("POST /api/generate", check_generate_external))

    passed = sum(1 for item in results if item.passed)
    failed = len(results) - passed

    print("\nAcceptance Smoke Report")
    print("=" * 24)
    for item in results:
        status = "PASS" if item.passed else "FAIL"
        print(f"[{status}] {item.name}: {item.detail}")

    print("-" * 24)
    print(f"passed={passed}, failed={failed}, total={len(results)}")
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
