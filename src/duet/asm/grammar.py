''' Instruction grammar '''

from typing import Callable, List

import pyparsing as pp

import duet.common.ops as ops
from duet.common.errors import MalformedInstruction
from duet.asm.operands import resolve_operand, resolve_register
from duet.asm.instructions import Instruction, KINDS


Resolver = Callable[[str], object]

# Fields per mnemonic, in textual order
FIELDS: dict[str, List[Resolver]] = {
    ops.SND: [resolve_operand],
    ops.SET: [resolve_register, resolve_operand],
    ops.ADD: [resolve_register, resolve_operand],
    ops.SUB: [resolve_register, resolve_operand],
    ops.MUL: [resolve_register, resolve_operand],
    ops.MOD: [resolve_register, resolve_operand],
    ops.RCV: [resolve_register],
    ops.JGZ: [resolve_operand, resolve_operand],
    ops.JNZ: [resolve_operand, resolve_operand],
}


class Decoder:
    ''' Text line -> Instruction '''
    instruction: pp.ParserElement

    def __init__(self):
        sep = pp.Suppress(pp.Literal(' '))
        reg_ref = pp.Regex('[A-Za-z]')
        operand = pp.Regex('[^ ]+')

        def g_cmd(mnemonic: str) -> pp.ParserElement:
            expr: pp.ParserElement = pp.Literal(mnemonic)

            for resolver in FIELDS[mnemonic]:
                field = reg_ref if resolver is resolve_register else operand
                expr = expr + sep + field

            # Tokens are separated by exactly one space
            return (expr + pp.StringEnd()).leave_whitespace()

        self.instruction = pp.MatchFirst([g_cmd(m) for m in ops.PRIORITY])

    def decode(self, line: str) -> Instruction:
        try:
            result = self.instruction.parse_string(line.strip(), parse_all=True)
        except pp.ParseBaseException as e:
            raise MalformedInstruction(line) from e

        mnemonic, *tokens = result
        args = [resolve(token) for resolve, token in zip(FIELDS[mnemonic], tokens)]
        return KINDS[mnemonic](*args)


def decode(line: str) -> Instruction:
    return Decoder().decode(line)


def render(instruction: Instruction) -> str:
    return instruction.render()
