"""YAML file backend implementation."""

from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path
from typing import Any

import structlog
import yaml

from project_manager.backends.memory import ID_PREFIXES, MemoryBackend
from project_manager.models import Project, Task, Team, Ticket

logger = structlog.get_logger()

MODELS: dict[str, type] = {"project": Project, "team": Team, "task": Task, "ticket": Ticket}


def _highest_id(record_ids: Iterable[str]) -> int:
    """Largest numeric suffix among ids such as ``T-7``, 0 if there is none."""
    numbers = [int(suffix) for _, _, suffix in (str(rid).rpartition("-") for rid in record_ids) if suffix.isdigit()]
    return max(numbers, default=0)


class YamlBackend(MemoryBackend):
    """Backend persisting all records to a single YAML file.

    The whole file is rewritten after every mutation. Layout::

        counters: {project: 2, team: 0, task: 5, ticket: 1}
        projects: [...]
        teams: [...]
        tasks: [...]
        tickets: [...]
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize YAML backend.

        Args:
            path: Data file, created on first write if it does not exist
        """
        super().__init__()
        self.path = Path(path)
        logger.debug("Initializing YAML backend", path=str(self.path))
        self._load()
        logger.info("YAML backend initialized", path=str(self.path))

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("Data file does not exist, starting empty")
            return

        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error("Failed to parse data file", error=str(e))
            raise ValueError(f"Failed to load data from {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Failed to load data from {self.path}: expected a mapping at top level")

        for kind, model in MODELS.items():
            for item in data.get(f"{kind}s") or []:
                try:
                    record = model(**item)
                except TypeError as e:
                    raise ValueError(f"Invalid {kind} record in {self.path}: {e}") from e
                self._records[kind][record.id] = record

        counters = data.get("counters") or {}
        for kind in ID_PREFIXES:
            self._counters[kind] = max(int(counters.get(kind, 0)), _highest_id(self._records[kind]))

        logger.debug("Data file loaded", **{f"{kind}s": len(records) for kind, records in self._records.items()})

    def _dump(self) -> dict[str, Any]:
        data: dict[str, Any] = {"counters": dict(self._counters)}
        for kind, records in self._records.items():
            data[f"{kind}s"] = [asdict(record) for record in records.values()]
        return data

    def _changed(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(self._dump(), f, default_flow_style=False, sort_keys=False)
            logger.debug("Data file saved", path=str(self.path))
        except OSError as e:
            logger.error("Failed to save data file", error=str(e))
            raise ValueError(f"Failed to save data to {self.path}: {e}") from e
