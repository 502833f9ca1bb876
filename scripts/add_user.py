#!/usr/bin/env python3
"""
Register a user directly in the configured store.

Usage:
  python scripts/add_user.py --username alice --email alice@example.com [--password secret]
"""
from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic_api.core.config import get_settings
from clinic_api.domain.errors import ClinicError
from clinic_api.services.clinic import build_services


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a clinic user")
    ap.add_argument("--username", required=True)
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", help="Password (prompted when omitted)")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Password: ")
    services = build_services(get_settings())
    try:
        user = services.auth.register(args.username, args.email, password)
    except ClinicError as exc:
        raise SystemExit(f"Error: {exc.message}")
    print("OK: user registered")
    print(f"  ID: {user.id}")
    print(f"  Username: {user.username}")
    print(f"  Email: {user.email}")


if __name__ == "__main__":
    main()
