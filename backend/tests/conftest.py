"""Root conftest — shared test configuration."""

import os

# Ensure tests never assemble a URI from real Atlas credentials
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("LOG_FORMAT", "text")
