"""Upload Gateway: photo uploads to object storage with public listing."""

__version__ = "1.0.0"
