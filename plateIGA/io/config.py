"""
Plate problem definitions from YAML files.

Example YAML format:
    plate:
      dimension: 2          # 1 = beam, 2 = plate
      thickness: 0.1
      gravity: 9.81
      rotary_inertia: false

    material:
      E: 2.1e11
      nu: 0.3
      rho: 7850.0

    pressure: 1.0e3         # constant, or:
    # pressure:
    #   type: sine
    #   q0: 1.0e3
    #   a: 1.0
    #   b: 1.0

    local_system:
      type: planar          # planar or polar
      angle: 30.0

    analysis:
      mode: dynamic         # static, dynamic, vibration, ...
      newmark:
        beta: 0.25
        gamma: 0.5
        alpha1: 0.0
        alpha2: 0.0
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..functions import ConstantFunc, SineLoad, PlanarLocalSystem, PolarLocalSystem
from ..solver.base import SolutionMode
from ..solver.elasticity import ALPHA1, ALPHA2, BETA, GAMMA
from ..solver.material import LinearIsotropic
from ..solver.plates.bernoulli import KirchhoffLovePlate

logger = logging.getLogger(__name__)


def load_config(filename: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a plate problem definition from a YAML file.

    Parameters:
        filename: Path to the YAML file

    Returns:
        The configuration dictionary

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    path = Path(filename)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")

    logger.debug("Loaded configuration from %s", path)
    return config


def _make_pressure(definition):
    if definition is None:
        return None
    if isinstance(definition, (int, float)):
        return ConstantFunc(definition)
    if isinstance(definition, dict):
        kind = definition.get('type', 'constant')
        if kind == 'constant':
            return ConstantFunc(definition.get('value', 0.0))
        if kind == 'sine':
            return SineLoad(definition['q0'], definition.get('a', 1.0), definition.get('b', 1.0))
        raise ValueError(f"Unknown pressure type: {kind}")
    raise ValueError(f"Invalid pressure definition: {definition!r}")


def _make_local_system(definition):
    if definition is None:
        return None
    kind = definition.get('type', 'planar')
    if kind == 'planar':
        return PlanarLocalSystem(definition.get('angle', 0.0))
    if kind == 'polar':
        return PolarLocalSystem(definition.get('centre', (0.0, 0.0)))
    raise ValueError(f"Unknown local system type: {kind}")


def setup_problem_from_config(config: Dict[str, Any]) -> KirchhoffLovePlate:
    """
    Set up a plate integrand from a configuration dictionary.

    Parameters:
        config: Configuration as returned by load_config

    Returns:
        Configured KirchhoffLovePlate

    Raises:
        ValueError: On invalid or inconsistent input
    """
    plate_cfg = config.get('plate', {})
    nsd = int(plate_cfg.get('dimension', 2))

    thickness = float(plate_cfg.get('thickness', 0.1))
    if thickness <= 0.0:
        raise ValueError(f"Plate thickness must be positive, got {thickness}")

    plate = KirchhoffLovePlate(nsd, rotary_inertia=bool(plate_cfg.get('rotary_inertia', False)))
    plate.set_thickness(thickness)
    plate.set_gravity(float(plate_cfg.get('gravity', 0.0)))

    mat_cfg = config.get('material')
    if mat_cfg is None:
        raise ValueError("No material defined")
    plate.set_material(LinearIsotropic(E=float(mat_cfg.get('E', 2.1e11)),
                                       nu=float(mat_cfg.get('nu', 0.3)),
                                       rho=float(mat_cfg.get('rho', 7.85e3)),
                                       nsd=nsd))

    plate.set_pressure(_make_pressure(config.get('pressure')))
    plate.set_local_system(_make_local_system(config.get('local_system')))

    analysis = config.get('analysis', {})
    mode_name = analysis.get('mode', 'static')
    try:
        mode = SolutionMode(mode_name)
    except ValueError:
        raise ValueError(f"Unknown solution mode: {mode_name}") from None
    plate.set_mode(mode)

    newmark = analysis.get('newmark', {})
    plate.set_integration_prm(ALPHA1, float(newmark.get('alpha1', 0.0)))
    plate.set_integration_prm(ALPHA2, float(newmark.get('alpha2', 0.0)))
    plate.set_integration_prm(BETA, float(newmark.get('beta', 0.25)))
    plate.set_integration_prm(GAMMA, float(newmark.get('gamma', 0.5)))

    plate.print_log()
    return plate
