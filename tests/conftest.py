"""Shared fixtures."""

from typing import Iterator

import numpy as np
import pytest

import tinct_colorengine
from tinct_colorengine import ColorScienceConstants


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    np.random.seed(12345)


@pytest.fixture()
def strict_ieee() -> Iterator[None]:
    """Run a test with the strict IEEE kernels and restore fast mode after."""
    tinct_colorengine.set_strict_ieee(True)
    try:
        yield
    finally:
        tinct_colorengine.set_strict_ieee(False)


@pytest.fixture(scope="session")
def d50() -> ColorScienceConstants:
    return ColorScienceConstants.from_white_point((96.422, 100.0, 82.521))


@pytest.fixture()
def srgb_grid() -> np.ndarray:
    steps = np.linspace(0.0, 1.0, 6)
    r, g, b = np.meshgrid(steps, steps, steps, indexing="ij")
    return np.stack([r.ravel(), g.ravel(), b.ravel()], axis=1)
