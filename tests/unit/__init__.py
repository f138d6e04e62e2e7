"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No subprocesses or network; temporary files only through ``tmp_path``.
- Timer-based helpers use short delays with generous settle times.
- Prefer behaviour-centric assertions over implementation details.
"""
