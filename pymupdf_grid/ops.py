"""Drawing operator stream consumed by the segment extractor.

Opcode numbers follow the PDF.js ``OPS`` table so operator lists produced by
other renderers can be fed in unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Sequence, Tuple


class OPS(IntEnum):
    """Opcodes understood by the extractor."""

    setLineWidth = 2
    moveTo = 13
    lineTo = 14
    curveTo = 15
    curveTo2 = 16
    curveTo3 = 17
    closePath = 18
    rectangle = 19
    constructPath = 91


# Number of coordinates each path sub-operation consumes.
PATH_ARG_COUNTS = {
    OPS.moveTo: 2,
    OPS.lineTo: 2,
    OPS.curveTo: 6,
    OPS.curveTo2: 4,
    OPS.curveTo3: 4,
    OPS.closePath: 0,
    OPS.rectangle: 4,
}


class OperatorStreamError(ValueError):
    """Raised when an operator stream is structurally invalid."""


@dataclass(frozen=True)
class Operation:
    """A single drawing instruction: an opcode and its arguments."""

    fn: int
    args: Tuple = ()


def construct_path(path_ops: Sequence[int], coords: Sequence[float]) -> Operation:
    """Build a constructPath operation from sub-opcodes and flat coordinates."""
    return Operation(
        OPS.constructPath,
        (tuple(int(op) for op in path_ops), tuple(float(c) for c in coords)),
    )


def set_line_width(width: float) -> Operation:
    return Operation(OPS.setLineWidth, (float(width),))


class OperatorList(Sequence[Operation]):
    """Ordered, immutable sequence of drawing operations for one page."""

    __slots__ = ("_ops",)

    def __init__(self, operations: Iterable[Operation] = ()):
        self._ops: Tuple[Operation, ...] = tuple(operations)

    @classmethod
    def from_pairs(
        cls, fn_array: Sequence[int], args_array: Sequence[Sequence]
    ) -> "OperatorList":
        """Build from parallel opcode / argument arrays (PDF.js layout)."""
        if len(fn_array) != len(args_array):
            raise OperatorStreamError(
                f"fn_array has {len(fn_array)} entries but args_array has "
                f"{len(args_array)}"
            )
        return cls(
            Operation(int(fn), tuple(args or ()))
            for fn, args in zip(fn_array, args_array)
        )

    def __getitem__(self, index):
        if isinstance(index, slice):
            return OperatorList(self._ops[index])
        return self._ops[index]

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._ops)

    def __repr__(self) -> str:
        return f"OperatorList({len(self._ops)} operations)"

    def construct_paths(self) -> List[Operation]:
        """Return only the constructPath operations, in stream order."""
        return [op for op in self._ops if op.fn == OPS.constructPath]

    def validate(self) -> "OperatorList":
        """Check every path carries exactly the coordinates it consumes.

        Returns ``self`` so the call can be chained.
        """
        for index, op in enumerate(self._ops):
            if op.fn == OPS.setLineWidth:
                if len(op.args) != 1:
                    raise OperatorStreamError(
                        f"operation {index}: setLineWidth takes one argument"
                    )
                continue
            if op.fn != OPS.constructPath:
                continue
            if len(op.args) < 2:
                raise OperatorStreamError(
                    f"operation {index}: constructPath needs sub-ops and coordinates"
                )
            path_ops, coords = op.args[0], op.args[1]
            expected = 0
            for sub_op in path_ops:
                try:
                    expected += PATH_ARG_COUNTS[OPS(sub_op)]
                except (KeyError, ValueError) as exc:
                    raise OperatorStreamError(
                        f"operation {index}: unknown path sub-operation {sub_op!r}"
                    ) from exc
            if expected != len(coords):
                raise OperatorStreamError(
                    f"operation {index}: sub-operations consume {expected} "
                    f"coordinates but {len(coords)} were given"
                )
        return self


__all__ = [
    "OPS",
    "Operation",
    "OperatorList",
    "OperatorStreamError",
    "construct_path",
    "set_line_width",
]
