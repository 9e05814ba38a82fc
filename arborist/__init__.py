"""
arborist - run commands in throwaway git branches and worktrees
"""

from .__version__ import __version__
from .core import Arborist
from .cli.main import main

__all__ = ["Arborist", "main", "__version__"]
