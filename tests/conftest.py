"""Root conftest: shared test configuration."""

import os

# Settings are read at import time; routes use an overridden in-memory DB
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
