"""Global pytest configuration."""

import os

# Keep tests off any real store or content service before any imports
os.environ.setdefault("GLOBETROTTER_STORE_URL", "sqlite:///:memory:")
os.environ["GLOBETROTTER_OPENAI_API_KEY"] = ""
