#!/usr/bin/env python3
"""Run readiness checks and report pass/fail per item and overall. Exit 0 if all required checks pass, 1 otherwise."""
import sys
from pathlib import Path

# Ensure the package is importable when run as a script from a checkout
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from pushgate.readiness import run_all_checks, is_ready


def main() -> int:
    checks = run_all_checks()
    ready, summary = is_ready(checks)
    for name, msg in summary.items():
        status = "OK" if checks[name][0] else "FAIL"
        print(f"  {name}: {status}  {msg}")
    print("")
    if ready and checks["credentials"][0]:
        print("Readiness: READY (config, packages and service account ok)")
        return 0
    print("Readiness: NOT READY (one or more checks failed)")
    return 1


if __name__ == "__main__":
    sys.exit(main())
