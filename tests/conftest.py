"""Point the app at an in-memory SQLite database before anything imports its settings."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "dev"
