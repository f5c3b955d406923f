"""Integration tests.

Purpose
- Exercise the tree engine against a real filesystem.

Guidelines
- Build every tree under pytest's ``tmp_path``; never touch paths outside it.
- Assert on what ends up on disk, not on which syscalls were made.
- Mark as 'integration' and keep them slower but reliable.
"""
