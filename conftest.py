"""Global configuration for pytest"""

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def predictable_random_numbers():
    """Seed numpy's random generator at the start of each test."""
    np.random.seed(0)


@pytest.fixture(autouse=True, scope="session")
def numerical_exceptions():
    """Turn numerical errors (overflow, divide by zero, etc.) into exceptions,
    so that our code has to handle such cases explicitly.
    """
    np.seterr(all="raise")

