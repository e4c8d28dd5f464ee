"""Problem definition input."""

from .config import load_config, setup_problem_from_config
