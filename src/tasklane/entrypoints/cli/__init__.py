"""The ``tasklane`` command-line interface."""
