''' Decoded machine instructions '''

from dataclasses import dataclass
from typing import ClassVar, Sequence

import duet.common.ops as ops
from duet.asm.operands import Operand


class Instruction:
    MNEMONIC: ClassVar[str]

    def operands(self) -> Sequence[object]:
        raise NotImplementedError()

    def render(self) -> str:
        args = ' '.join(str(arg) for arg in self.operands())
        return f'{self.MNEMONIC} {args}'

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Send(Instruction):
    MNEMONIC = ops.SND
    source: Operand

    def operands(self):
        return [self.source]


@dataclass(frozen=True)
class RegisterOp(Instruction):
    ''' R <- R op X, destination is always a register name '''
    register: str
    source: Operand

    def operands(self):
        return [self.register, self.source]


class Set(RegisterOp):
    MNEMONIC = ops.SET


class Add(RegisterOp):
    MNEMONIC = ops.ADD


class Sub(RegisterOp):
    MNEMONIC = ops.SUB


class Mul(RegisterOp):
    MNEMONIC = ops.MUL


class Mod(RegisterOp):
    MNEMONIC = ops.MOD


@dataclass(frozen=True)
class Receive(Instruction):
    MNEMONIC = ops.RCV
    register: str

    def operands(self):
        return [self.register]


@dataclass(frozen=True)
class Jump(Instruction):
    condition: Operand
    offset: Operand

    def operands(self):
        return [self.condition, self.offset]

    def taken(self, condition: int) -> bool:
        raise NotImplementedError()


class JumpIfPositive(Jump):
    MNEMONIC = ops.JGZ

    def taken(self, condition: int) -> bool:
        return condition > 0


class JumpIfNonZero(Jump):
    MNEMONIC = ops.JNZ

    def taken(self, condition: int) -> bool:
        return condition != 0


# Mnemonic -> Instruction class
KINDS: dict[str, type[Instruction]] = {
    ops.SND: Send,
    ops.SET: Set,
    ops.ADD: Add,
    ops.SUB: Sub,
    ops.MUL: Mul,
    ops.MOD: Mod,
    ops.RCV: Receive,
    ops.JGZ: JumpIfPositive,
    ops.JNZ: JumpIfNonZero,
}
