"""TASKLANE

Asynchronous helpers built around a sequential task queue.
Work items submitted to the queue run one at a time, strictly in the order
they were submitted, and each caller gets back a future carrying exactly
the value or exception its own work item produced.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
