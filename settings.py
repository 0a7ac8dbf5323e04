"""Configuration for the ray tracer, read from environment variables."""

import os
from pathlib import Path

# Rendering
WORKERS = int(os.getenv("RT_WORKERS", "8"))
MAX_DEPTH = int(os.getenv("RT_MAX_DEPTH", "5"))
QUEUE_SIZE = int(os.getenv("RT_QUEUE_SIZE", "1024"))

# Taichi backend used for the canvas buffer and image encoding
TAICHI_ARCH = os.getenv("RT_TAICHI_ARCH", "cpu")

# Paths
OUTPUT_DIR = Path(os.getenv("RT_OUTPUT_DIR", "output"))

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

__all__ = [
    "WORKERS",
    "MAX_DEPTH",
    "QUEUE_SIZE",
    "TAICHI_ARCH",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "LOG_FORMAT",
]
