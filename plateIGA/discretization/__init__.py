"""
Discretization: Bernstein basis and Bezier elements.
"""

from .bernstein import BernsteinBasis, bernstein_basis_ders
from .element import BezierElement, make_rectangle_element, make_line_element
