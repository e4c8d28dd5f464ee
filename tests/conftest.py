"""
Pytest configuration and shared fixtures for plate integrand tests.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add the parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from plateIGA.solver.material import LinearIsotropic
from plateIGA.solver.plates.bernoulli import KirchhoffLovePlate


@pytest.fixture
def tolerance():
    """Default tolerance for floating point comparisons."""
    return 1e-12


@pytest.fixture
def loose_tolerance():
    """Looser tolerance for numerical integration tests."""
    return 1e-8


@pytest.fixture
def material():
    """Isotropic material with round numbers."""
    return LinearIsotropic(E=1.2e4, nu=0.25, rho=10.0)


@pytest.fixture
def plate(material):
    """Static plate integrand, thickness 0.1, no loads."""
    problem = KirchhoffLovePlate()
    problem.set_thickness(0.1)
    problem.set_material(material)
    return problem
