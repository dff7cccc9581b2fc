"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use: the environment must be in place before
# wildwatch.main is imported by any test module.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SUPABASE_JWT_SECRET", "wildwatch-test-secret-0123456789abcdef")
os.environ.setdefault("SUPABASE_PROJECT_REF", "testref")
os.environ.setdefault("LOG_FORMAT", "text")
