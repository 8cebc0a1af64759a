"""Design analysis and tabulation modules."""

from . import design_analysis as design_analysis
from . import grid as grid
