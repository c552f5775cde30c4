#!/usr/bin/env python3
"""
Test runner script for ProtNet by test category
"""

import subprocess
import sys

MARKER_SUITES = ("graph", "merge", "analytics", "ingestion", "cli")


def run_tests(test_type="unit"):
    """Run tests based on type"""

    base_cmd = ["uv", "run", "pytest"]

    if test_type == "unit":
        cmd = base_cmd + ["tests/unit/", "-v"]
    elif test_type == "integration":
        cmd = base_cmd + ["tests/integration/", "-v", "-m", "integration"]
    elif test_type in MARKER_SUITES:
        cmd = base_cmd + ["tests/", "-v", "-m", test_type]
    elif test_type == "all":
        cmd = base_cmd + ["tests/", "-v"]
    elif test_type == "coverage":
        cmd = base_cmd + [
            "tests/",
            "--cov=protnet",
            "--cov-report=term-missing",
        ]
    else:
        print(f"Unknown test type: {test_type}")
        print(f"Available types: unit, integration, {', '.join(MARKER_SUITES)}, all, coverage")
        return 1

    print(f"Running {test_type} tests...")
    print(f"Command: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, check=False)
        return result.returncode
    except KeyboardInterrupt:
        print("\nTests interrupted by user")
        return 1


if __name__ == "__main__":
    test_type = sys.argv[1] if len(sys.argv) > 1 else "unit"
    sys.exit(run_tests(test_type))
