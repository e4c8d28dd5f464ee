"""
Element integrands.
"""

from .base import (Integrand, NormBase, IntegrandType, SolutionMode, TimeDomain,
                   integrate_element, integrate_boundary, gather_element_vector)
from .finite_element import FiniteElement
from .local_integral import ElmMats, ElmNorm
from .material import Material, LinearIsotropic, ConstantMaterial
from .elasticity import ElasticBase
