"""Append-only log of items created during a provisioning run.

Provisioning is not transactional: when a run fails part way, the items
created so far stay in Sitecore. The run log lists them so they can be
inspected or removed by external tooling.
"""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    """Kind of item created by the provisioner."""

    TEMPLATE = "template"
    TEMPLATE_FOLDER = "template_folder"
    RENDERING_FOLDER = "rendering_folder"
    SECTION = "section"
    FIELD = "field"
    DATA_FOLDER_TEMPLATE = "data_folder_template"
    DATA_FOLDER = "data_folder"
    RENDERING = "rendering"
    CONTENT_ITEM = "content_item"
    PAGE_DATA = "page_data"


@dataclass(frozen=True)
class CreatedResourceRecord:
    """One created item."""

    kind: ResourceKind
    id: str
    name: str
    path: str
    parent_id: str
    template_id: str


class RunLog:
    """Ordered record of every item created in one run.

    Entries can only be appended; the log is never rewritten.
    """

    def __init__(self) -> None:
        self.started_at = datetime.now(timezone.utc)
        self._records: list[CreatedResourceRecord] = []

    def append(self, record: CreatedResourceRecord) -> None:
        self._records.append(record)

    def __iter__(self) -> Iterator[CreatedResourceRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[CreatedResourceRecord, ...]:
        return tuple(self._records)

    def ids(self, kind: Optional[ResourceKind] = None) -> list[str]:
        """Return created item ids in creation order, optionally for one kind."""
        return [r.id for r in self._records if kind is None or r.kind == kind]

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "created": [
                {**asdict(r), "kind": r.kind.value} for r in self._records
            ],
        }

    def write(self, output_path: Path) -> None:
        """Write the log as JSON.

        Args:
            output_path: Destination file (parent directories are created)
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
            f.write("\n")
        logger.info(f"Wrote run log with {len(self)} created items to {output_path}")
