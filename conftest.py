import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
# tests never talk to a real Redis
os.environ.pop("REDIS_URL", None)
