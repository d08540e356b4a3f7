"""Structural diff between two parsed JSON values, built on DeepDiff."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from deepdiff import DeepDiff

from api_regression.domain.endpoint import JsonValue

PathElement = Union[str, int]

KIND_NEW = "N"
KIND_DELETED = "D"
KIND_EDITED = "E"
KIND_ARRAY = "A"

_EDIT_REPORTS = ("values_changed", "type_changes")


@dataclass(frozen=True)
class DiffRecord:
    """
    One structural edit.

    Kinds: N (added), D (deleted), E (edited), A (array change; ``index``
    names the element and ``item`` holds the nested N/D record).
    """

    kind: str
    path: Tuple[PathElement, ...] = ()
    lhs: JsonValue = None
    rhs: JsonValue = None
    index: Optional[int] = None
    item: Optional["DiffRecord"] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind}
        if self.path:
            data["path"] = list(self.path)
        if self.kind == KIND_ARRAY:
            data["index"] = self.index
            data["item"] = self.item.to_dict() if self.item else None
            return data
        if self.kind in (KIND_DELETED, KIND_EDITED):
            data["lhs"] = self.lhs
        if self.kind in (KIND_NEW, KIND_EDITED):
            data["rhs"] = self.rhs
        return data


def _normalize_numbers(value: JsonValue) -> JsonValue:
    """Collapse integral floats (1.0) to ints so JSON numbers compare by value."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_normalize_numbers(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_numbers(item) for key, item in value.items()}
    return value


def _sort_key(record: DiffRecord):
    path = record.path + ((record.index,) if record.index is not None else ())
    return tuple((0, p, "") if isinstance(p, int) else (1, 0, str(p)) for p in path)


def structural_diff(lhs: JsonValue, rhs: JsonValue) -> List[DiffRecord]:
    """
    Compare two JSON values deeply and in order.

    Integer and float values that are numerically equal are treated as the
    same JSON number. A key holding null is distinct from a missing key.

    Args:
        lhs: Value from version 1
        rhs: Value from version 2

    Returns:
        Edit records ordered by path; empty when the values are equal
    """
    tree = DeepDiff(
        _normalize_numbers(lhs),
        _normalize_numbers(rhs),
        view="tree",
        ignore_order=False,
        # Always descend into dicts, however few keys they share
        threshold_to_diff_deeper=0,
    )

    records: List[DiffRecord] = []
    for report_type, levels in tree.items():
        for level in levels:
            path = tuple(level.path(output_format="list"))
            if report_type in _EDIT_REPORTS:
                records.append(DiffRecord(KIND_EDITED, path, lhs=level.t1, rhs=level.t2))
            elif report_type == "dictionary_item_added":
                records.append(DiffRecord(KIND_NEW, path, rhs=level.t2))
            elif report_type == "dictionary_item_removed":
                records.append(DiffRecord(KIND_DELETED, path, lhs=level.t1))
            elif report_type == "iterable_item_added":
                item = DiffRecord(KIND_NEW, rhs=level.t2)
                records.append(DiffRecord(KIND_ARRAY, path[:-1], index=path[-1], item=item))
            elif report_type == "iterable_item_removed":
                item = DiffRecord(KIND_DELETED, lhs=level.t1)
                records.append(DiffRecord(KIND_ARRAY, path[:-1], index=path[-1], item=item))
            else:
                # Report types outside plain JSON (sets, attributes) still surface as edits
                records.append(DiffRecord(KIND_EDITED, path, lhs=level.t1, rhs=level.t2))

    return sorted(records, key=_sort_key)
