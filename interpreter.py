from __future__ import annotations

import string
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TextIO

from bfio import ByteSink, ByteSource, StreamSink, StreamSource
from brainfuck import BrainfuckError, BrainfuckProgram, InputFailure, SegmentationFault, load

DEFAULT_TAPE_SIZE = 1024


class PointerPolicy(Enum):
    BOUNDED = "bounded"
    WRAP = "wrap"


@dataclass(slots=True)
class RunState:
    program: BrainfuckProgram
    tape: bytearray
    policy: PointerPolicy = PointerPolicy.BOUNDED
    pointer: int = 0
    ip: int = 0
    output: bytearray = field(default_factory=bytearray)

    @classmethod
    def fresh(cls, program: BrainfuckProgram, tape_size: int,
              policy: PointerPolicy = PointerPolicy.BOUNDED) -> RunState:
        return cls(program, bytearray(tape_size), policy)

    @property
    def done(self) -> bool:
        return self.ip >= len(self.program)

    def move(self, delta: int) -> None:
        target = self.pointer + delta
        if self.policy is PointerPolicy.WRAP:
            target %= len(self.tape)
        elif not 0 <= target < len(self.tape):
            raise SegmentationFault(target, len(self.tape), self.ip)
        self.pointer = target

    def step(self, source: ByteSource, sink: ByteSink) -> None:
        """Execute the instruction at ``ip`` and advance past it."""
        next_ip = self.ip + 1
        match self.program[self.ip]:
            case ">":
                self.move(1)
            case "<":
                self.move(-1)
            case "+":
                self.tape[self.pointer] = (self.tape[self.pointer] + 1) & 0xFF
            case "-":
                self.tape[self.pointer] = (self.tape[self.pointer] - 1) & 0xFF
            case ".":
                value = self.tape[self.pointer]
                sink.write_byte(value)
                self.output.append(value)
            case ",":
                try:
                    value = source.read_byte()
                except EOFError as e:
                    raise InputFailure(self.ip) from e
                except OSError as e:
                    raise InputFailure(self.ip, str(e)) from e
                self.tape[self.pointer] = value & 0xFF
            case "[":
                if self.tape[self.pointer] == 0:
                    next_ip = self.program.pairs[self.ip] + 1
            case "]":
                if self.tape[self.pointer]:
                    next_ip = self.program.pairs[self.ip] + 1
        self.ip = next_ip


@dataclass(frozen=True)
class Completed:
    output: str


@dataclass(frozen=True)
class Failed:
    error: BrainfuckError
    state: RunState


def decode_output(data: bytes) -> str:
    # one character per emitted byte, trimming ASCII whitespace only
    return data.decode("latin-1").strip(string.whitespace)


def execute(program: BrainfuckProgram, tape_size: int = DEFAULT_TAPE_SIZE,
            source: Optional[ByteSource] = None, sink: Optional[ByteSink] = None,
            policy: PointerPolicy = PointerPolicy.BOUNDED) -> Completed | Failed:
    """
    Run ``program`` on a fresh zeroed tape until it ends or hits a fatal error.

    The bracket table is resolved before the first instruction, so an unbalanced program fails
    without executing anything. Errors are returned as ``Failed`` instead of being raised.
    """
    source = source if source is not None else StreamSource()
    sink = sink if sink is not None else StreamSink()
    state = RunState.fresh(program, tape_size, policy)
    try:
        program.pairs
        while not state.done:
            state.step(source, sink)
    except BrainfuckError as e:
        return Failed(e, state)
    return Completed(decode_output(state.output))


class BrainfuckInterpreter:
    """
    Interprets Brainfuck source text on a tape of ``tape_size`` byte cells.

    Every call to ``interpret`` or ``run`` is an independent run: the tape, both pointers and the
    collected output start from scratch. Not safe for concurrent use from several threads.
    """

    def __init__(self, tape_size: int = DEFAULT_TAPE_SIZE, debug: bool = False,
                 source: Optional[ByteSource] = None, sink: Optional[ByteSink] = None,
                 policy: PointerPolicy = PointerPolicy.BOUNDED, trace_file: Optional[TextIO] = None):
        self.tape_size = tape_size
        self.debug = debug
        self.source = source if source is not None else StreamSource()
        self.sink = sink if sink is not None else StreamSink()
        self.policy = policy
        self.trace_file = trace_file
        self._output = ""

    @property
    def tape_size(self) -> int:
        return self._tape_size

    @tape_size.setter
    def tape_size(self, size: int) -> None:
        # Takes effect on the next run
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"Tape size must be an int, not {type(size).__name__}")
        if size < 1:
            raise ValueError(f"Tape size must be at least 1, got {size}")
        self._tape_size = size

    @property
    def output(self) -> str:
        """Trimmed output of the last successful run."""
        return self._output

    def trace(self, message: str) -> None:
        if self.debug:
            print(message, file=self.trace_file if self.trace_file is not None else sys.stderr)

    def run(self, source: str) -> Completed | Failed:
        self._output = ""
        self.trace("loading program")
        program = load(source)
        self.trace("executing program")
        result = execute(program, self.tape_size, self.source, self.sink, self.policy)
        if isinstance(result, Completed):
            self._output = result.output
        return result

    def interpret(self, source: str) -> str:
        match self.run(source):
            case Completed(output):
                return output
            case Failed(error):
                raise error
