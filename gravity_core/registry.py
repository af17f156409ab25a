#!/usr/bin/env python3
"""
Body registry for Gravity Sandbox.

The registry owns every live Body. Bodies are addressed by a stable integer id that
is never reused, so presentation objects can hold an id as a back-reference without
owning the body. Iteration order is insertion order, which fixes the pair
enumeration order of the force pass.
"""
import itertools
from typing import Dict, Iterator, List, Optional

from .data_models import Body, BodyView


class BodyRegistry:
    """Insertion-ordered arena of bodies keyed by id."""

    def __init__(self):
        self._bodies: Dict[int, Body] = {}
        self._ids = itertools.count()

    def next_id(self) -> int:
        return next(self._ids)

    def add(self, body: Body) -> Body:
        if body.id in self._bodies:
            raise ValueError(f"Duplicate body id {body.id}")
        self._bodies[body.id] = body
        return body

    def get(self, body_id: int) -> Optional[Body]:
        return self._bodies.get(body_id)

    def remove(self, body_id: int) -> Body:
        """Remove and return a body. Raises KeyError for an unknown id."""
        return self._bodies.pop(body_id)

    def clear(self) -> int:
        """Remove every body; returns how many were removed."""
        n = len(self._bodies)
        self._bodies.clear()
        return n

    def bodies(self) -> List[Body]:
        """Live bodies in insertion order (the list is a copy, the bodies are not)."""
        return list(self._bodies.values())

    def views(self) -> List[BodyView]:
        return [BodyView(b.id, b.position, b.radius, b.color) for b in self._bodies.values()]

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(list(self._bodies.values()))

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._bodies
