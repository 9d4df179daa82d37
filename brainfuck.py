from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from frozendict import frozendict

INSTRUCTIONS = frozenset("><+-.,[]")


class BrainfuckError(Exception):
    pass


class SegmentationFault(BrainfuckError):
    def __init__(self, pointer: int, tape_size: int, ip: int):
        self.pointer = pointer
        self.tape_size = tape_size
        self.ip = ip
        super(SegmentationFault, self).__init__(
            f"Segmentation fault: data pointer moved to {pointer} outside of a tape of {tape_size} cells "
            f"(instruction {ip})")


class UnbalancedLoop(BrainfuckError, ValueError):
    def __init__(self, position: int, bracket: str):
        self.position = position
        self.bracket = bracket
        super(UnbalancedLoop, self).__init__(f"Unmatched {bracket!r} at instruction {position}")


class InputFailure(BrainfuckError):
    def __init__(self, ip: int, reason: str = "input exhausted"):
        self.ip = ip
        super(InputFailure, self).__init__(f"Could not read input for instruction {ip}: {reason}")


@dataclass(frozen=True)
class BrainfuckProgram:
    code: str

    def __len__(self) -> int:
        return len(self.code)

    def __getitem__(self, ip: int) -> str:
        return self.code[ip]

    @cached_property
    def is_balanced(self) -> bool:
        try:
            self.pairs
            return True
        except UnbalancedLoop:
            return False

    @cached_property
    def pairs(self) -> frozendict[int, int]:
        stack = []
        pairs = {}
        for i, c in enumerate(self.code):
            if c == "[":
                stack.append(i)
            elif c == "]":
                try:
                    j = stack.pop()
                except IndexError:
                    raise UnbalancedLoop(i, "]") from None
                pairs[i] = j
                pairs[j] = i
        if stack:
            raise UnbalancedLoop(stack[-1], "[")
        return frozendict(pairs)


def load(source: str) -> BrainfuckProgram:
    """Keep only the eight instruction characters of ``source``; everything else is a comment."""
    return BrainfuckProgram("".join(c for token in source.split() for c in token if c in INSTRUCTIONS))
