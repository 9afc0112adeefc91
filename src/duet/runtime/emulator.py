import sys
from collections import deque
from pathlib import Path
import logging as lg
import traceback
from typing import Dict, Iterable, List, Tuple

import click

from duet.common.errors import DuetError
from duet.common.hwconf import DEFAULT_MAX_STEPS
from duet.asm.program import Program
from duet.asm.instructions import Send, Receive
import duet.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_BLOCKED = 2
EXIT_STEP_LIMIT = 3
EXIT_KEYBOARD = 4
EXIT_EXEC_ERROR = 100


class Result:
    proc: cpu.CPU
    sent: List[int]

    def __init__(self, proc: cpu.CPU):
        self.proc = proc
        self.sent = []


class Stopped(Exception):
    ''' Run ended before the machine halted '''
    result: Result

    def __init__(self, message: str, result: Result):
        super().__init__(message)
        self.result = result


class Blocked(Stopped):
    ''' rcv with nothing left to receive '''
    pass


class StepLimit(Stopped):
    pass


def preset_registers(proc: cpu.CPU, presets: Dict[str, int]):
    for register, value in presets.items():
        proc.registers.set(register, value)


def execute(
    program: Program,
    inputs: Iterable[int] = (),
    presets: Dict[str, int] | None = None,
    max_steps: int | None = None
) -> Result:
    ''' Runs one machine until it halts.

    snd appends to Result.sent, rcv takes the next value from inputs.
    Raises Blocked when rcv finds no input and StepLimit after max_steps.
    '''
    proc = cpu.CPU(program)
    result = Result(proc)
    queue = deque(inputs)

    preset_registers(proc, presets or {})

    while not proc.halted():
        if max_steps is not None and proc.steps >= max_steps:
            raise StepLimit(f'Step limit {max_steps} reached at 0x{proc.ip:X}', result)

        instruction = proc.current()

        if isinstance(instruction, Receive):
            if not queue:
                raise Blocked(f'{instruction} blocked at 0x{proc.ip:X}', result)

            proc.receive(queue.popleft())
            continue

        if isinstance(instruction, Send):
            value = proc.registers.evaluate(instruction.source)
            lg.debug(f'{instruction} => {value}')
            result.sent.append(value)

        proc.exec_next()

    lg.info(f'Halted after {proc.steps} steps')
    proc.registers.debug_dump()
    return result


def parse_presets(ctx, param, values: Tuple[str]) -> Dict[str, int]:
    presets = {}

    for text in values:
        register, sep, value = text.partition('=')

        try:
            if not sep:
                raise ValueError(text)

            presets[register.strip()] = int(value)
        except ValueError:
            raise click.BadParameter(f'Expected R=VALUE, got {text!r}')

    return presets


def report(proc: cpu.CPU, sent: List[int]):
    for value in sent:
        click.echo(f'snd {value}')

    for register, value in proc.registers.dump().items():
        click.echo(f'{register} = {value}')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-r', '--register', 'presets', multiple=True, callback=parse_presets,
              help='Preset register, e.g. -r a=1')
@click.option('-i', '--input', 'inputs', multiple=True, type=int, help='Value for rcv, in order')
@click.option('--max-steps', type=int, default=DEFAULT_MAX_STEPS, show_default=True)
@click.argument('source', type=Path)
def run(verbose: bool, presets: Dict[str, int], inputs: Tuple[int], max_steps: int, source: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("DUET")

    try:
        program = Program.load(source.read_text())
        result = execute(
            program,
            inputs=inputs,
            presets=presets,
            max_steps=max_steps
        )

        report(result.proc, result.sent)
        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except Blocked as e:
        report(e.result.proc, e.result.sent)
        lg.info(f'Execution halted on empty input: {e}')
        sys.exit(EXIT_BLOCKED)

    except StepLimit as e:
        report(e.result.proc, e.result.sent)
        lg.info(f'Execution stopped: {e}')
        sys.exit(EXIT_STEP_LIMIT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except DuetError as e:
        lg.error(f'Execution halted on error {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
