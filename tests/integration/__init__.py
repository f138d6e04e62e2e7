"""Integration tests.

Purpose
- Exercise work items against real operating-system resources: shell
  subprocesses and the filesystem.

Guidelines
- Use ``tmp_path`` for anything written to disk.
- Keep commands POSIX-portable (``/bin/sh`` syntax).
"""
