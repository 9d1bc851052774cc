"""Co-change graph and component clustering."""

from .clustering import Component, ComponentClusterer
from .cochange import CoChangeGraph

__all__ = ["CoChangeGraph", "Component", "ComponentClusterer"]
