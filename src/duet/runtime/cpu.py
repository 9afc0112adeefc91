import enum
import logging as lg

from duet.common.errors import MachineHalted
from duet.common.hwconf import START_ADDRESS, HALT_SENTINEL
from duet.asm.program import Program
from duet.asm.instructions import Instruction, Receive
from duet.runtime.registers import RegisterFile


class State(enum.Enum):
    RUNNING = 'running'
    HALTED = 'halted'


def next_pointer(registers: RegisterFile, instruction: Instruction, pointer: int) -> int:
    return registers.next_pointer(instruction, pointer)


class CPU:
    ''' One machine: a shared Program, its own registers and pointer '''
    program: Program
    registers: RegisterFile
    ip: int  # Instruction pointer
    state: State
    steps: int

    def __init__(self, program: Program, registers: RegisterFile | None = None):
        self.program = program
        self.registers = registers if registers is not None else RegisterFile()
        self.ip = START_ADDRESS
        self.state = State.RUNNING
        self.steps = 0
        self.check_bounds()

    def halted(self) -> bool:
        return self.state == State.HALTED

    def check_bounds(self):
        if self.ip == HALT_SENTINEL or self.ip >= len(self.program):
            lg.debug(f'Halted at 0x{self.ip:X}')
            self.state = State.HALTED

    def current(self) -> Instruction | None:
        if self.halted():
            return None

        return self.program[self.ip]

    def advance(self, instruction: Instruction):
        self.ip = self.registers.next_pointer(instruction, self.ip)
        self.steps += 1
        self.check_bounds()

    def exec_next(self) -> Instruction:
        ''' Executes one instruction and returns it.

        Send and Receive have no register effects here, the driver acts on
        the returned instruction. For Receive the driver should use receive()
        instead, so the value lands before the pointer moves on.
        '''
        instruction = self.current()

        if instruction is None:
            raise MachineHalted(f'Machine halted at 0x{self.ip:X}')

        self.registers.apply(instruction)
        self.advance(instruction)
        return instruction

    def receive(self, value: int) -> Instruction:
        instruction = self.current()

        if instruction is None:
            raise MachineHalted(f'Machine halted at 0x{self.ip:X}')

        if not isinstance(instruction, Receive):
            raise UserWarning(f'Expected rcv, got {instruction}')

        lg.debug(f'{instruction} <= {value}')
        self.registers.set(instruction.register, value)
        self.advance(instruction)
        return instruction
