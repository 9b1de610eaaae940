"""Test environment: in-memory SQLite, a fixed signing secret and a known admin."""

import os

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-signing-secret-" + "x" * 64
os.environ["JWT_ALGORITHM"] = "HS512"
os.environ["PRELOAD_ENABLED"] = "true"
os.environ["ADMIN_EMAIL"] = "admin@taskboard.test"
os.environ["ADMIN_PASSWORD"] = "admin-pw"
os.environ["CORS_ALLOWED_ORIGINS"] = "http://localhost:3000"

import taskboard.core.security as security  # noqa: E402

# Minimum bcrypt cost keeps hashing fast in tests.
security.BCRYPT_ROUNDS = 4
