"""Depth-first collection of string values stored under a target key."""

from __future__ import annotations

from typing import Any, Iterable, List, Tuple

from ..types import NestedValue, NodeKind, node_kind


def extract(value: NestedValue, target_key: str, out: List[str]) -> None:
    """Append every non-empty string found under ``target_key`` to ``out``.

    A matching entry is never descended into: when its value is a nested
    structure, or a non-string scalar, or ``""``, it contributes nothing.
    Every other mapping entry and every sequence element is visited in its
    own order. Unexpected shapes are ignored rather than reported.
    """

    # Each frame is (emit, node): emit frames carry a string ready for ``out``.
    stack: List[Tuple[bool, Any]] = [(False, value)]
    while stack:
        emit, node = stack.pop()
        if emit:
            out.append(node)
            continue
        kind = node_kind(node)
        if kind is NodeKind.MAPPING:
            frames: List[Tuple[bool, Any]] = []
            for key, child in node.items():
                if key != target_key:
                    frames.append((False, child))
                elif isinstance(child, str) and child:
                    frames.append((True, child))
            stack.extend(reversed(frames))
        elif kind is NodeKind.SEQUENCE:
            stack.extend((False, item) for item in reversed(node))
        # scalars hold nothing to collect


def extract_all(values: Iterable[NestedValue], target_key: str) -> List[str]:
    found: List[str] = []
    for value in values:
        extract(value, target_key, found)
    return found
