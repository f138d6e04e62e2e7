"""Support namespace for small, dependency-light helpers.

Scope:
- Key case conversion for payload shaping (``casing.py``).
- Event-loop timing helpers: debouncing (``debounce.py``) and batching of
  callbacks behind a single timer (``callbacks.py``).

Import direction:
- May be imported by any TASKLANE package.
- Must not import from `tasklane.adapters` or `tasklane.entrypoints`.

Public API:
- Nothing is re-exported at the package level. Import specific helpers from
  their defining modules.
"""
