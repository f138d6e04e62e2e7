"""Contract tests.

Purpose
- Define task queue behaviour once (ordering, exclusivity, outcome
  pass-through, failure isolation) and run it against every TaskQueue
  implementation.

Guidelines
- Parametrize implementations via the ``queue`` fixture.
- Assert only the public contract, not internals.
"""
