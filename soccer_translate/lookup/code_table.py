# soccer_translate/lookup/code_table.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from soccer_translate.utils.logger import setup_logger

logger = setup_logger(__name__)


class CodeRecord(BaseModel):
    """Descriptive record for one occupation code.

    Only ``code`` is interpreted; every other field of the source record is
    kept as-is and returned to callers untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    code: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def _ensure_list(results: Any) -> List[Any]:
    if not isinstance(results, list):
        raise TypeError(
            f"Expected a list of SOCcer results, got {type(results).__name__}."
        )
    return results


def _result_code(result: Any) -> Optional[str]:
    """Extract the ``code`` field from a SOCcer result, if there is one."""
    if isinstance(result, dict):
        code = result.get("code")
        return code if isinstance(code, str) else None
    return None


class CodeTable:
    """Read-only mapping from occupation code to its descriptive record.

    Lookups use exact string equality. When the source data holds the same
    code more than once, the first record wins.
    """

    def __init__(self, records: Iterable[CodeRecord], language: str = "es") -> None:
        self.language = language
        self._records: List[CodeRecord] = list(records)
        self._index: Dict[str, CodeRecord] = {}
        for record in self._records:
            self._index.setdefault(record.code, record)

    @classmethod
    def from_json(cls, path: str | Path, language: str = "es") -> "CodeTable":
        """Load a code table from a JSON array of objects with a ``code`` field.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a JSON array.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Code table file not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        if not isinstance(raw, list):
            raise ValueError(
                f"Expected a JSON array of code records in {path}, got {type(raw).__name__}."
            )

        table = cls((CodeRecord(**item) for item in raw), language=language)

        logger.info(
            "Code table loaded.",
            extra={"path": str(path), "language": language, "size": len(table)},
        )
        return table

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, code: object) -> bool:
        return code in self._index

    def lookup(self, code: Optional[str]) -> Optional[Dict[str, Any]]:
        """Return the record for ``code``, or None when there is no match."""
        if code is None:
            return None
        record = self._index.get(code)
        return record.to_dict() if record is not None else None

    def match_codes(self, results: Any) -> List[Dict[str, Any]]:
        """Map SOCcer results to records, dropping results without a match."""
        matches: List[Dict[str, Any]] = []
        for result in _ensure_list(results):
            record = self.lookup(_result_code(result))
            if record is not None:
                matches.append(record)
        return matches

    def map_codes(self, results: Any) -> List[Optional[Dict[str, Any]]]:
        """Map SOCcer results to records one-to-one; None where nothing matches."""
        return [self.lookup(_result_code(result)) for result in _ensure_list(results)]
