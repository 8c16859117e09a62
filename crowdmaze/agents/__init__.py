"""Simulated audience members for headless sessions."""

from crowdmaze.agents.base_viewer import BaseViewer
from crowdmaze.agents.random_viewer import RandomViewer

__all__ = [
    "BaseViewer",
    "RandomViewer",
]
