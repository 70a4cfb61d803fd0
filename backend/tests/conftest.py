"""Shared test environment.

The application refuses to import without a token secret, so a test secret is
set before any test module imports ``backend.src.api.main``.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-value-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
