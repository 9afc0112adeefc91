import pytest
from click.testing import CliRunner

import duet.runtime.emulator as emulator
from duet.asm.program import Program

import unit_utils


def test_execute_arithmetic():
    result = emulator.execute(unit_utils.load_program('arithmetic'))

    assert result.proc.halted()
    assert result.proc.registers.get('a') == 0
    assert result.sent == []


def test_execute_countdown():
    result = emulator.execute(unit_utils.load_program('countdown'))

    assert result.sent == [5, 4, 3, 2, 1]
    assert result.proc.registers.dump() == {'r': 42}


def test_execute_blocked():
    with pytest.raises(emulator.Blocked) as e:
        emulator.execute(unit_utils.load_program('recover'), inputs=[0])

    result = e.value.result
    assert result.sent == [4]
    assert result.proc.ip == 6
    assert result.proc.registers.get('a') == 1


def test_execute_presets():
    result = emulator.execute(Program.load('jnz a -1'), presets={'a': 1})

    assert result.proc.halted()
    assert result.proc.steps == 1


def test_execute_step_limit():
    with pytest.raises(emulator.StepLimit) as e:
        emulator.execute(Program.load('jgz 1 0'), max_steps=100)

    assert e.value.result.proc.steps == 100
    assert e.value.result.proc.ip == 0


def test_run_cli():
    runner = CliRunner()
    source = unit_utils.find_file('testdata/duet/countdown.duet')
    outcome = runner.invoke(emulator.run, [str(source)])

    assert outcome.exit_code == emulator.EXIT_HALT
    assert outcome.output == 'snd 5\nsnd 4\nsnd 3\nsnd 2\nsnd 1\nr = 42\n'


def test_run_cli_blocked():
    runner = CliRunner()
    source = unit_utils.find_file('testdata/duet/recover.duet')
    outcome = runner.invoke(emulator.run, ['-i', '0', '-r', 'z=3', str(source)])

    assert outcome.exit_code == emulator.EXIT_BLOCKED
    assert outcome.output == 'snd 4\na = 1\nz = 3\n'


def test_run_cli_bad_preset():
    runner = CliRunner()
    source = unit_utils.find_file('testdata/duet/countdown.duet')
    outcome = runner.invoke(emulator.run, ['-r', 'a', str(source)])

    assert outcome.exit_code == 2
    assert 'Expected R=VALUE' in outcome.output


def test_run_cli_malformed():
    runner = CliRunner()
    source = unit_utils.find_file('testdata/duet/broken.duet')
    outcome = runner.invoke(emulator.run, [str(source)])

    assert outcome.exit_code == emulator.EXIT_EXEC_ERROR
