"""
CLI Commands Package
Image, network and container commands
"""

from . import images
from . import networks
from . import containers

__all__ = ['images', 'networks', 'containers']
