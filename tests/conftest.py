import os

# Keep the test run away from any local Redis and .env overrides
os.environ["REDIS_URL"] = ""
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
