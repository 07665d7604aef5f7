"""
Core post-processing engine.

The `PostProcessor` runs the pipeline over a working directory, handing the
tagging sets it finds to the `Renamer`, the `Mover` and the `Deleter` in turn.
"""

from .deleter import Deleter
from .mover import Mover
from .post_processor import PostProcessor
from .renamer import Renamer

__all__ = ["Deleter", "Mover", "PostProcessor", "Renamer"]
