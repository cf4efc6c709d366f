"""
Smoke test for a running CodeGenius server.

Calls the health endpoint and ``/api/execute`` with a small Python
snippet, printing each response.  The exit status is non-zero if any
call fails, which makes the script usable as a post-deploy check:

```sh
python -m codegenius.smoke https://codegenius-backend.onrender.com
```
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

DEFAULT_BASE_URL = "http://localhost:4000"

SAMPLE_EXECUTE_REQUEST = {
    "text": 'Execute the following Python code:\n```python\nprint("Hello, World!")\n```',
    "language": "python",
}


@dataclass
class CheckResult:
    name: str
    ok: bool
    status_code: Optional[int]
    body: Any


def _check(client: httpx.Client, name: str, method: str, path: str, **kwargs: Any) -> CheckResult:
    try:
        response = client.request(method, path, **kwargs)
    except httpx.HTTPError as exc:
        return CheckResult(name, False, None, f"No response received: {exc}")
    try:
        body = response.json()
    except ValueError:
        body = response.text
    ok = response.is_success and not (isinstance(body, dict) and body.get("isError"))
    return CheckResult(name, ok, response.status_code, body)


def run_smoke_test(base_url: str, client: Optional[httpx.Client] = None) -> List[CheckResult]:
    """Run the checks against ``base_url`` and return their results."""
    own_client = client is None
    if client is None:
        client = httpx.Client(base_url=base_url, timeout=120.0)
    try:
        return [
            _check(client, "root", "GET", "/"),
            _check(client, "execute", "POST", "/api/execute", json=SAMPLE_EXECUTE_REQUEST),
        ]
    finally:
        if own_client:
            client.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Smoke test a CodeGenius server.")
    parser.add_argument("base_url", nargs="?", default=DEFAULT_BASE_URL)
    args = parser.parse_args(argv)

    print(f"Testing backend API at {args.base_url}")
    results = run_smoke_test(args.base_url)
    for result in results:
        label = "OK" if result.ok else "FAILED"
        print(f"[{label}] {result.name} (status={result.status_code})")
        print(json.dumps(result.body, indent=2) if not isinstance(result.body, str) else result.body)
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
