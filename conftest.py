"""Test-run environment. Modules read these at import time."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.pop("MONGO_URL", None)
os.environ.pop("MONGODB_URI", None)
