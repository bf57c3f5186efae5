"""
Mirror — Copy upstream distribution archives into a private repository.

This module provides version discovery and ordering, tag-based
idempotency tracking, archive download and the orchestration of
single-version and batch mirror runs.
"""
