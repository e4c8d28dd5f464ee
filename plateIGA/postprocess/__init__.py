"""Visualization output."""

from .vtk import VTKPointWriter, BlockCounters
