from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from pm2_recover.domain.errors import MissingKeyError, SnapshotFormatError, SnapshotNotFoundError
from pm2_recover.domain.models import ProcessDescriptor
from pm2_recover.infra.snapshot.schemas import DumpRecord


class SnapshotLoader:
    """Read a pm2 dump file and turn its records into process descriptors."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def load(self, dump_path: Union[str, Path]) -> List[ProcessDescriptor]:
        """Load and validate every record; the first bad record fails the whole file."""
        path = Path(dump_path).expanduser()
        if not path.is_file():
            raise SnapshotNotFoundError(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SnapshotFormatError(path, str(exc)) from exc
        descriptors = self.parse(text, source=path)
        self.logger.info(
            "Loaded %s processes from %s",
            len(descriptors),
            path,
            extra={"event": "snapshot.loaded"},
        )
        return descriptors

    def parse(self, text: str, source: Union[str, Path] = "<memory>") -> List[ProcessDescriptor]:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotFormatError(source, f"invalid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise SnapshotFormatError(
                source, f"expected a JSON array of processes, got {type(payload).__name__}"
            )
        return [self._parse_record(item, index, source) for index, item in enumerate(payload)]

    def _parse_record(self, item: Any, index: int, source: Union[str, Path]) -> ProcessDescriptor:
        if not isinstance(item, dict):
            raise SnapshotFormatError(
                source, f"process #{index} must be a JSON object, got {type(item).__name__}"
            )
        try:
            record = DumpRecord.model_validate(item)
        except ValidationError as exc:
            missing = next((err for err in exc.errors() if err["type"] == "missing"), None)
            name = item.get("name") if isinstance(item.get("name"), str) else None
            if missing is not None:
                raise MissingKeyError(source, index, name, str(missing["loc"][0])) from exc
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise SnapshotFormatError(
                source, f"process #{index} ({name or '?'}) has invalid '{field}': {first['msg']}"
            ) from exc
        self.logger.debug(
            "Parsed process #%s",
            index,
            extra={"event": "snapshot.record", "process_name": record.name},
        )
        return record.to_descriptor()


def load_snapshot(dump_path: Union[str, Path]) -> List[ProcessDescriptor]:
    return SnapshotLoader().load(dump_path)
