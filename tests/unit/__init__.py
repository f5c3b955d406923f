"""Unit tests.

Purpose
- Verify a single module/function in isolation.

Guidelines
- No real I/O; the URI engine and path sanitizers are pure string functions.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
