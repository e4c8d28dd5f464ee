"""
plateIGA - Kirchhoff-Love plate integrands for isogeometric analysis

Element-level numerics of thin plate (and Euler-Bernoulli beam) bending:
stiffness, mass and load contributions at each integration point,
bending moment recovery from a displacement solution, and energy and
error norms against an optional analytical solution.

Key modules:
- discretization: Bernstein basis (up to second derivatives), Bezier elements
- quadrature: Gauss-Legendre integration
- solver: integrand contracts, element accumulators, materials,
  Kirchhoff-Love plate and norm integrands
- postprocess: VTK export of point values
- io: YAML problem definitions

Quick start:
    from plateIGA import (KirchhoffLovePlate, LinearIsotropic, ConstantFunc,
                          GaussQuadrature, make_rectangle_element,
                          integrate_element, integrate_boundary)

    plate = KirchhoffLovePlate()
    plate.set_thickness(0.1)
    plate.set_material(LinearIsotropic(E=2.1e11, nu=0.3, rho=7850.0))
    plate.set_pressure(ConstantFunc(1.0))

    element = make_rectangle_element(p=2)
    quadrature = GaussQuadrature.for_degree(element.degrees)
    plate.init_integration(quadrature.n_points, quadrature.n_points)

    ok, K_e = integrate_element(plate, element, quadrature)
    ok, f_e = integrate_boundary(plate, element, quadrature)
"""

__version__ = "0.1.0"

from .functions import (ConstantFunc, ConstantVectorFunc, SineLoad,
                        PlanarLocalSystem, PolarLocalSystem)
from .quadrature.gauss import GaussQuadrature
from .discretization.element import (BezierElement, make_rectangle_element,
                                     make_line_element)
from .solver.base import (SolutionMode, IntegrandType, TimeDomain,
                          integrate_element, integrate_boundary)
from .solver.material import LinearIsotropic, ConstantMaterial
from .solver.plates.bernoulli import KirchhoffLovePlate
from .solver.plates.norms import KirchhoffLovePlateNorm
from .solver.plates.analytical import NavierPlate
from .postprocess.vtk import VTKPointWriter, BlockCounters
