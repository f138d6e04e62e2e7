"""Entrypoints (inbound adapters) for TASKLANE.

Expose the library to the outside world: currently the ``tasklane`` CLI.
Parse and validate inputs, build work items, submit them to a queue and
present results.
"""
