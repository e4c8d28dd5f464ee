from .gauss import GaussQuadrature, gauss_legendre_1d, gauss_legendre_2d
