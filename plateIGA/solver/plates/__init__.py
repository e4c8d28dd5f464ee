"""
Plate integrands.
"""

from .bernoulli import KirchhoffLovePlate
from .norms import KirchhoffLovePlateNorm
from .analytical import NavierPlate
