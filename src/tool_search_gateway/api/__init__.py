# API package
# HTTP endpoints exposing the tool search subsystem

from . import tools

__all__ = ["tools"]
