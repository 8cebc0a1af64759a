"""
Shared pytest fixtures for ProPower tests.
"""

import contextlib
import io

import pytest


@pytest.fixture
def quiet():
    """Suppress stdout for the duration of a test."""
    with contextlib.redirect_stdout(io.StringIO()):
        yield


@pytest.fixture
def election_model():
    """Even split against a suspected 60% share."""
    from propower import ProportionPower

    with contextlib.redirect_stdout(io.StringIO()):
        return ProportionPower(reference_proportion=0.5, alternative_proportion=0.6)


@pytest.fixture
def rare_event_model():
    """Rare proportion: 4% reference against a suspected 3%."""
    from propower import ProportionPower

    with contextlib.redirect_stdout(io.StringIO()):
        return ProportionPower(reference_proportion=0.04, alternative_proportion=0.03)
