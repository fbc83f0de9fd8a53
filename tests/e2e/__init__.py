"""
End-to-end tests for the strata CLI.

These tests write real config files and read them back through complete
CLI invocations. All tests in this directory are marked with
@pytest.mark.e2e.
"""
