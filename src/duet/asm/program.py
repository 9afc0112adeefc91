''' Immutable decoded programs '''

import logging as lg
from typing import Iterator, List, Sequence, Tuple

from duet.common.errors import MalformedInstruction, MalformedOperand
from duet.asm.grammar import Decoder
from duet.asm.instructions import Instruction


def source_lines(text: str) -> Iterator[Tuple[int, str]]:
    ''' (1-based line number, line) from the first to the last instruction

    Lines end with \\n or \\r\\n only. Blank lines are tolerated before the first
    and after the last instruction; blank lines in between are decoded and fail.
    '''
    lines = [line.removesuffix('\r') for line in text.split('\n')]
    filled = [lineno for lineno, line in enumerate(lines, start=1) if line.strip()]

    if not filled:
        return

    first, last = filled[0], filled[-1]

    for lineno in range(first, last + 1):
        yield lineno, lines[lineno - 1]


def decode_line(decoder: Decoder, lineno: int, line: str) -> Instruction:
    try:
        return decoder.decode(line)
    except MalformedInstruction as e:
        raise MalformedInstruction(line, lineno) from e.__cause__
    except MalformedOperand as e:
        raise MalformedInstruction(line, lineno) from e


class Program:
    instructions: Tuple[Instruction, ...]

    def __init__(self, instructions: Sequence[Instruction]):
        self.instructions = tuple(instructions)

    @staticmethod
    def load(text: str, decoder: Decoder | None = None) -> 'Program':
        if decoder is None:
            decoder = Decoder()

        instructions = [
            decode_line(decoder, lineno, line)
            for lineno, line in source_lines(text)
        ]

        lg.debug(f'Loaded {len(instructions)} instructions')
        return Program(instructions)

    def render(self) -> str:
        return ''.join(f'{instruction.render()}\n' for instruction in self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, pointer: int) -> Instruction:
        # Pointers are unsigned
        if pointer < 0:
            raise IndexError(pointer)

        return self.instructions[pointer]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented

        return self.instructions == other.instructions

    def __hash__(self) -> int:
        return hash(self.instructions)

    def __str__(self) -> str:
        return self.render()


def check(text: str, decoder: Decoder | None = None) -> List[MalformedInstruction]:
    ''' Decodes every line and collects all failures instead of stopping at the first '''
    if decoder is None:
        decoder = Decoder()

    errors: List[MalformedInstruction] = []

    for lineno, line in source_lines(text):
        try:
            decode_line(decoder, lineno, line)
        except MalformedInstruction as e:
            errors.append(e)

    return errors
