import logging as lg
from typing import Callable, Dict, List

from duet.common.errors import DivisionByZero, RegisterIndexOutOfRange
from duet.common.hwconf import (
    REGISTER_NAMES, NUMBER_OF_REGS, WORD_MASK, WORD_MIN, HALT_SENTINEL
)
from duet.asm.operands import Operand, Register, Immediate
from duet.asm.instructions import (
    Instruction, RegisterOp, Set, Add, Sub, Mul, Mod, Jump
)


def wrap(value: int) -> int:
    ''' Two's complement signed 64-bit wraparound '''
    return ((value - WORD_MIN) & WORD_MASK) + WORD_MIN


def truncating_mod(a: int, b: int) -> int:
    ''' Remainder whose sign follows the dividend '''
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def displace(pointer: int, displacement: int) -> int:
    if displacement < 0 and -displacement > pointer:
        # Would jump before the start of the program
        return HALT_SENTINEL

    return min(pointer + displacement, HALT_SENTINEL)


class RegisterFile:
    regs: List[int]

    def __init__(self):
        self.regs = [0] * NUMBER_OF_REGS

    # - Helpers - #

    def index(self, register: str) -> int:
        if len(register) != 1 or register not in REGISTER_NAMES:
            raise RegisterIndexOutOfRange(register)

        return ord(register) - ord('a')

    def dump(self) -> Dict[str, int]:
        return {name: v for name, v in zip(REGISTER_NAMES, self.regs) if v != 0}

    def debug_dump(self):
        state = [f'{k}:{v}' for k, v in self.dump().items()]
        lg.debug(' '.join(state))

    # - Storage - #

    def get(self, register: str) -> int:
        return self.regs[self.index(register)]

    def set(self, register: str, value: int):
        self.regs[self.index(register)] = wrap(value)

    def evaluate(self, operand: Operand) -> int:
        match operand:
            case Register(name):
                return self.get(name)
            case Immediate(value):
                return value

        raise TypeError(f'Not an operand {operand!r}')

    # - Arithmetic - #

    def arithm_pair(self, instruction: RegisterOp, op: Callable[[int, int], int]):
        a = self.get(instruction.register)
        b = self.evaluate(instruction.source)
        result = wrap(op(a, b))
        lg.debug(f'{instruction} ({a}) {b} => {result}')
        self.set(instruction.register, result)

    def mod(self, instruction: Mod):
        if self.evaluate(instruction.source) == 0:
            raise DivisionByZero(instruction)

        self.arithm_pair(instruction, truncating_mod)

    def apply(self, instruction: Instruction) -> bool:
        ''' Applies register effects; False hands the instruction back to the caller '''
        match instruction:
            case Set(register, source):
                value = self.evaluate(source)
                lg.debug(f'{register} <= {value}')
                self.set(register, value)
            case Add():
                self.arithm_pair(instruction, lambda a, b: a + b)
            case Sub():
                self.arithm_pair(instruction, lambda a, b: a - b)
            case Mul():
                self.arithm_pair(instruction, lambda a, b: a * b)
            case Mod():
                self.mod(instruction)
            case _:
                return False

        return True

    # - Control flow - #

    def next_pointer(self, instruction: Instruction, pointer: int) -> int:
        if not isinstance(instruction, Jump):
            return pointer + 1

        condition = self.evaluate(instruction.condition)

        if instruction.taken(condition):
            displacement = self.evaluate(instruction.offset)
        else:
            displacement = 1

        lg.debug(
            f'{instruction} ({condition}) => {instruction.taken(condition)}, '
            f'{pointer} + {displacement}'
        )

        return displace(pointer, displacement)
