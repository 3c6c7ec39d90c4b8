import os
import tempfile

# Settings are read at import time by cosense_rag.celery and cosense_rag.main
os.environ.setdefault("OBJECT_STORE_BACKEND", "local")
os.environ.setdefault(
    "LOCAL_STORE_PATH", os.path.join(tempfile.gettempdir(), "cosense-rag-tests")
)
os.environ.setdefault("PROJECT_NAME", "test-project")
os.environ.setdefault("COSENSE_SID", "test-sid")
os.environ.setdefault("OTEL_ENABLED", "false")
os.environ.setdefault("API_KEY", "")
