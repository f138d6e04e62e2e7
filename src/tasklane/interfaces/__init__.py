"""Interfaces (application boundary) for TASKLANE.

Defines framework-free contracts: ABCs, type aliases and the error base
shared by adapters, work item factories and entrypoints. No scheduling logic
lives here.

Dependency rule: this package is independent. Do not import from any other
`tasklane.*` modules. It may be imported by `tasklane.adapters`,
`tasklane.work_items`, `tasklane.utils` and `tasklane.entrypoints`.
"""
