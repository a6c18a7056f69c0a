import logging
import math
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from binary_search_tree import BinarySearchTree


logger = logging.getLogger(__name__)


class LayoutConfig(BaseModel):
    # the surface never shrinks below this, even for an empty or tiny tree
    baseline_width: float = Field(800.0, gt=0)
    baseline_height: float = Field(600.0, gt=0)
    # horizontal room for one node on the bottom level
    node_width: float = Field(60.0, gt=0)
    # vertical distance between levels
    level_spacing: float = Field(120.0, gt=0)


class TreeMeasurement(NamedTuple):
    """Minimum surface size for a tree"""
    width: float
    height: float


class TreeLayout:
    """Calculate the surface size needed to draw a tree of a given height.

    Only the shape of the tree matters: the bottom level of a tree of height h has room for 2^(h - 1) nodes, and every
    level gets the same vertical spacing. Node keys are never read. A tree too tall for the bottom level's width to fit
    in a float (over roughly 1000 levels) measures as infinitely wide.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config if config is not None else LayoutConfig()

    def measure_height(self, height: int) -> TreeMeasurement:
        """Return the measurement for a tree with `height` levels (0 for an empty tree)."""
        if height < 0:
            raise ValueError(f'Tree height must be non-negative, got {height}')
        config = self.config
        width = config.baseline_width
        if height >= 1:
            try:
                bottom_width = math.ldexp(config.node_width, height - 1)
            except OverflowError:
                bottom_width = math.inf
            width = max(width, bottom_width)
        measurement = TreeMeasurement(width, max(config.baseline_height, height * config.level_spacing))
        logger.debug('Measured height %d as %s', height, measurement)
        return measurement

    def measure(self, tree: BinarySearchTree) -> TreeMeasurement:
        return self.measure_height(tree.get_height())
