#!/usr/bin/env python3
"""
Evaluation runner for the Huffman compressor.

This evaluation script:
- Runs the pytest suite in tests/ and collects per-test pass/fail status
- Compresses a set of synthetic corpora, checks each round trip and records
  compressed size and timings
- Writes a JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output report.json] [--size-kb 256]
"""
import argparse
import json
import platform
import random
import subprocess
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from huffman_service import HuffmanService  # noqa: E402

OUTCOMES = ("PASSED", "FAILED", "ERROR", "SKIPPED")
STATUS_ICONS = {"passed": "✅", "failed": "❌", "error": "💥", "skipped": "⏭️"}

WORDS = ("the of and to in is that for it as was with be by on not he this are "
         "or his from at which but have an they you were her she there").split()


def get_git_commit():
    try:
        result = subprocess.run(["git", "rev-parse", "--short", "HEAD"],
                                capture_output=True, text=True, timeout=5, cwd=str(PROJECT_ROOT))
    except (OSError, subprocess.TimeoutExpired):
        return "unknown"
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def get_environment_info():
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": get_git_commit(),
    }


def parse_pytest_verbose_output(output):
    """Pick `tests/test_x.py::test_y PASSED` style lines out of `pytest -v` output."""
    tests = []
    for line in output.splitlines():
        line = line.strip()
        if "::" not in line:
            continue
        for word in OUTCOMES:
            marker = " " + word
            if marker in line:
                nodeid = line.split(marker)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": word.lower(),
                })
                break
    return tests


def run_tests(timeout=600):
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")

    cmd = [sys.executable, "-m", "pytest", str(PROJECT_ROOT / "tests"), "-v", "--tb=short"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True,
                                cwd=str(PROJECT_ROOT), timeout=timeout)
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {"success": False, "exit_code": -1, "tests": [], "summary": {"error": "timeout"}}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = {"total": len(tests)}
    for word in OUTCOMES:
        summary[word.lower()] = sum(1 for t in tests if t["outcome"] == word.lower())

    print(f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['error']} errors, {summary['skipped']} skipped (total: {summary['total']})")
    for test in tests:
        print(f"  {STATUS_ICONS.get(test['outcome'], '❓')} {test['nodeid']}: {test['outcome']}")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def make_corpora(size, seed=0):
    rng = random.Random(seed)
    text = []
    while sum(len(w) + 1 for w in text) < size:
        text.append(rng.choice(WORDS))
    return {
        "uniform256": bytes(rng.getrandbits(8) for _ in range(size)),
        "english_like": " ".join(text).encode("ascii")[:size],
        "repetitive90": bytes(65 if rng.random() < 0.9 else rng.getrandbits(8) for _ in range(size)),
        "single_symbol": b"A" * size,
    }


def run_benchmark(size):
    print(f"\n{'=' * 60}")
    print(f"RUNNING BENCHMARK ({size} bytes per corpus)")
    print(f"{'=' * 60}")

    svc = HuffmanService()
    rows = []
    for name, data in make_corpora(size).items():
        t0 = time.perf_counter()
        packed = svc.compress(data)
        t1 = time.perf_counter()
        restored = svc.decompress(packed)
        t2 = time.perf_counter()

        row = {
            "corpus": name,
            "input_bytes": len(data),
            "output_bytes": len(packed),
            "ratio": round(len(packed) / len(data), 6),
            "compress_seconds": round(t1 - t0, 6),
            "decompress_seconds": round(t2 - t1, 6),
            "roundtrip_ok": restored == data,
        }
        rows.append(row)
        icon = "✅" if row["roundtrip_ok"] else "❌"
        print(f"  {icon} {name:<14} {row['input_bytes']:>9} -> {row['output_bytes']:>9} bytes "
              f"ratio={row['ratio']:.3f} enc={row['compress_seconds']:.3f}s "
              f"dec={row['decompress_seconds']:.3f}s")
    return {"success": all(r["roundtrip_ok"] for r in rows), "corpora": rows}


def generate_output_path():
    """evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    return PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S") / "report.json"


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the Huffman compressor evaluation")
    parser.add_argument("--output", type=str, default=None,
                        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)")
    parser.add_argument("--size-kb", type=int, default=256, help="benchmark corpus size in KiB")
    parser.add_argument("--skip-tests", action="store_true", help="only run the benchmark")
    args = parser.parse_args(argv)

    run_id = uuid.uuid4().hex[:8]
    started_at = datetime.now()
    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    tests = None if args.skip_tests else run_tests()
    benchmark = run_benchmark(args.size_kb * 1024)
    success = benchmark["success"] and (tests is None or tests["success"])

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()
    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "environment": get_environment_info(),
        "tests": tests,
        "benchmark": benchmark,
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")

    print(f"\n{'=' * 60}")
    print("EVALUATION COMPLETE")
    print(f"{'=' * 60}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
