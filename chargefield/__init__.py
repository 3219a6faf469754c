"""Tools for drawing electrostatic field lines and equipotential bands."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.0.1"
