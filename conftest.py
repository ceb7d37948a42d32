"""Global pytest configuration."""

import os

# Set storage settings for tests before any imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("OPENAI_API_KEY", "")
