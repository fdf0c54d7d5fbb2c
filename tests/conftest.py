"""
Pytest configuration and fixtures for excsig tests.
"""

import sys
import pytest
from pathlib import Path

# Add project root to path for all imports
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from excsig.signature import ExceptionRecord, Frame


def _capture(func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except BaseException as e:
        return e
    raise AssertionError(f"{func.__name__} did not raise")


@pytest.fixture
def capture():
    """Call a function and return the exception it raises."""
    return _capture


@pytest.fixture
def sample_frame():
    """A non-generic frame with two parameters."""
    return Frame(
        method_name="connect",
        declaring_type="app.net.Client",
        parameters=[("str", "host"), ("int", "port")],
    )


@pytest.fixture
def sample_record(sample_frame):
    """A single exception record without an inner exception."""
    return ExceptionRecord(
        type_name="TimeoutError",
        message="Timeout: host=10.0.0.1",
        origin_frame=sample_frame,
        frames=[Frame(method_name="main", declaring_type="app.cli"), sample_frame],
    )


@pytest.fixture
def chained_record(sample_record):
    """An outer record whose inner record is sample_record."""
    return ExceptionRecord(
        type_name="RuntimeError",
        message="Could not complete action",
        origin_frame=Frame(method_name="run", declaring_type="app.jobs.Job"),
        frames=[Frame(method_name="run", declaring_type="app.jobs.Job")],
        inner=sample_record,
    )
