"""Sink protocol: the minimal push/close contract.

Anything that satisfies this protocol can be connected to a Source,
including another Source.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class Pushable(Protocol[T_contra]):
    """Protocol that every downstream consumer of a Source must satisfy."""

    def push(self, value: T_contra) -> None:
        """Receive one value."""
        ...

    def close(self) -> None:
        """Receive the terminal close signal."""
        ...
