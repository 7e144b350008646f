from __future__ import annotations

import os

import requests
from dotenv import load_dotenv

from greeter.config import get_port


def healthcheck_url() -> str:
    """Return the base URL of the server to probe."""
    configured = (os.environ.get("GREETER_HEALTHCHECK_URL") or "").strip()
    return configured or f"http://127.0.0.1:{get_port()}"


def check(base_url: str, timeout: float = 5.0) -> bool:
    """Return True when the login page answers 200."""
    response = requests.get(
        f"{base_url.rstrip('/')}/login",
        timeout=timeout,
        allow_redirects=False,
    )
    return response.status_code == 200


def main() -> None:
    load_dotenv()
    url = healthcheck_url()
    try:
        healthy = check(url)
    except requests.RequestException as exc:
        print(f"FAIL: {exc}")
        raise SystemExit(1) from exc
    if not healthy:
        print(f"FAIL: {url}/login did not return 200")
        raise SystemExit(1)
    print("OK")


if __name__ == "__main__":
    main()
