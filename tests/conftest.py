import os
import sys

import pytest

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import encoding
from encoding import DEFAULT_ALPHABET, HashCodec

TEST_SALT = "this is my salt"


@pytest.fixture
def codec(monkeypatch):
    """
    Replaces the process-wide codec with a fresh one for the duration of a
    test, so salt changes never leak between tests.
    """
    test_codec = HashCodec(salt=TEST_SALT, min_length=4, alphabet=DEFAULT_ALPHABET)
    monkeypatch.setattr(encoding, "_codec", test_codec)
    return test_codec
