"""
Dependency injection module.
"""

from .container import Container
from .bootstrap import bootstrap_dependencies

__all__ = ["Container", "bootstrap_dependencies"]
