"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from retryloop.config import Settings


class FlakyOperation:
    """Callable that raises a fixed number of times before returning a value.

    Records every call so tests can assert on attempt counts.
    """

    def __init__(self, failures: int, value=True, error_factory=None):
        self.failures = failures
        self.value = value
        self.error_factory = error_factory or (lambda n: RuntimeError(f"this is error no. {n}"))
        self.calls = 0
        self.errors: list[Exception] = []

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            error = self.error_factory(self.calls)
            self.errors.append(error)
            raise error
        return self.value


class CallbackRecorder:
    """Callback that records the errors it was invoked with."""

    def __init__(self):
        self.calls: list = []

    def __call__(self, error):
        self.calls.append(error)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="retryloop (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        LOG_ATTEMPTS=True,
        PROMETHEUS_ENABLED=True,
    )


@pytest.fixture
def create_flaky_operation():
    """Factory fixture to create FlakyOperation instances.

    Usage:
        def test_something(create_flaky_operation):
            op = create_flaky_operation(failures=3, value="ok")
    """

    def _create(failures: int = 0, value=True, error_factory=None) -> FlakyOperation:
        return FlakyOperation(failures, value=value, error_factory=error_factory)

    return _create


@pytest.fixture
def always_failing_operation(create_flaky_operation) -> FlakyOperation:
    """Operation that never succeeds."""
    return create_flaky_operation(failures=10**9)


@pytest.fixture
def callback_recorder():
    """Factory fixture creating fresh CallbackRecorder instances."""
    return CallbackRecorder
