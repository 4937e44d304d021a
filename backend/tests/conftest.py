"""Root conftest: shared test configuration."""

import os

# Ensure tests never talk to a real Supabase project
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
