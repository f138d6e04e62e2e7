"""TASKLANE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with the OS (subprocesses, files).
- contract/     : Behaviour every TaskQueue implementation must honour.
- e2e/          : The ``tasklane`` CLI driven through Click's test runner.
- fixtures/     : Shared pytest fixtures (registered via ``pytest_plugins``).
- helpers/      : Shared assertion utilities (no tests here).

General guidance
- Async tests use ``@pytest.mark.anyio`` (asyncio backend only).
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers unit, integration, contract and e2e are applied from the folder.
"""
