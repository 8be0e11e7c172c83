"""
NEAT Run Package

Configuration and the driver for complete evolutionary runs.

Exported Classes:
    Config: Configuration parameters, parsed from an INI file
    Trial:  Abstract base class for one independent run
"""

from neatgen.run.config import Config
from neatgen.run.trial  import Trial

__all__ = ['Config', 'Trial']
