"""Unit tests for tasklane.work_items."""
