from .node import Channel, LocalChannel, Node
from .launcher import Launcher, LocalLauncher

__all__ = ["Channel", "LocalChannel", "Node", "Launcher", "LocalLauncher"]
