"""Adapters for TASKLANE.

Concrete implementations of the contracts in `tasklane.interfaces`,
currently the asyncio-backed sequential task queue.

Dependency rule: may import `tasklane.interfaces`; interfaces must not import
this package.
"""
