"""Spin history: recording, querying and bulk clearing."""
