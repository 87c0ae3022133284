from .base import Scene
from .manager import SceneManager
from .network_scene import NetworkScene

__all__ = ["Scene", "SceneManager", "NetworkScene"]
