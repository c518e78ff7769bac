# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Development helper – fills the database with the sample user and todos.

    python bin/seed_data.py

Creates any missing tables first.  Safe to run repeatedly: nothing is
inserted when the sample user already exists.  Log in afterwards as
test@example.com / password123.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_data.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from database import SessionLocal, init_db   # noqa: E402
from seed import insert_test_data            # noqa: E402


def main():
    init_db()
    db = SessionLocal()
    try:
        if insert_test_data(db):
            print("[seed_data] Sample data created.")
        else:
            print("[seed_data] Sample user already exists – skipping.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
