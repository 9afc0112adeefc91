''' Instruction operands: register references and immediates '''

import re
from dataclasses import dataclass
from typing import TypeAlias

from duet.common.errors import MalformedOperand
from duet.common.hwconf import REGISTER_NAMES, WORD_MIN, WORD_MAX


REGISTER_RE = re.compile(r'[A-Za-z]')
VALUE_RE = re.compile(r'-?[0-9]+')


@dataclass(frozen=True)
class Register:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Immediate:
    value: int

    def __str__(self) -> str:
        return str(self.value)


Operand: TypeAlias = Register | Immediate


def resolve_register(token: str) -> str:
    if REGISTER_RE.fullmatch(token) is None or token not in REGISTER_NAMES:
        raise MalformedOperand(token)

    return token


def resolve_operand(token: str) -> Operand:
    if REGISTER_RE.fullmatch(token):
        return Register(resolve_register(token))

    if VALUE_RE.fullmatch(token):
        value = int(token)

        if value < WORD_MIN or value > WORD_MAX:
            raise MalformedOperand(token)

        return Immediate(value)

    raise MalformedOperand(token)
