"""Backend implementations."""

from project_manager.backends.memory import MemoryBackend
from project_manager.backends.yaml_file import YamlBackend

__all__ = ["MemoryBackend", "YamlBackend"]
