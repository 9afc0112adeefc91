import pytest

from duet.common.errors import MalformedInstruction, MalformedOperand
from duet.common.hwconf import WORD_MIN, WORD_MAX
from duet.asm.operands import Register as R, Immediate as I
from duet.asm.instructions import (
    Send, Set, Add, Sub, Mul, Mod, Receive, JumpIfPositive, JumpIfNonZero
)
from duet.asm.grammar import Decoder, decode, render


@pytest.fixture
def decoder():
    yield Decoder()


def test_decode_each_kind(decoder):
    assert decoder.decode('snd a') == Send(R('a'))
    assert decoder.decode('set b 3') == Set('b', I(3))
    assert decoder.decode('add c d') == Add('c', R('d'))
    assert decoder.decode('sub e -4') == Sub('e', I(-4))
    assert decoder.decode('mul f f') == Mul('f', R('f'))
    assert decoder.decode('mod g 5') == Mod('g', I(5))
    assert decoder.decode('rcv h') == Receive('h')
    assert decoder.decode('jgz i -2') == JumpIfPositive(R('i'), I(-2))
    assert decoder.decode('jnz 1 j') == JumpIfNonZero(I(1), R('j'))


def test_kinds_are_distinct(decoder):
    assert decoder.decode('add a 1') != decoder.decode('sub a 1')
    assert decoder.decode('jgz a 1') != decoder.decode('jnz a 1')


def test_surrounding_whitespace(decoder):
    assert decoder.decode('  set a 1  ') == Set('a', I(1))
    assert decoder.decode('\tjnz a -1\n') == JumpIfNonZero(R('a'), I(-1))


@pytest.mark.parametrize('line', [
    '', 'nop', 'set a', 'set a  1', 'set  a 1', 'set 1 2', 'set ab 1',
    'rcv 1', 'rcv a b', 'snd', 'snd a b', 'jgz a', 'jnz a b c', 'SET a 1'
])
def test_malformed_instruction(decoder, line):
    with pytest.raises(MalformedInstruction) as e:
        decoder.decode(line)

    assert e.value.line == line
    assert e.value.lineno is None


@pytest.mark.parametrize('line, token', [
    ('snd xy', 'xy'),
    ('set a 1x', '1x'),
    ('jgz -- 1', '--'),
    ('set A 1', 'A'),
    ('rcv Z', 'Z'),
    ('jnz a B', 'B'),
])
def test_malformed_operand(decoder, line, token):
    with pytest.raises(MalformedOperand) as e:
        decoder.decode(line)

    assert e.value.token == token


def test_decoder_is_reusable(decoder):
    first = decoder.decode('mul a -3')
    decoder.decode('add b 2')
    assert decoder.decode('mul a -3') == first
    assert decode('mul a -3') == first


@pytest.mark.parametrize('instruction, text', [
    (Send(I(-10)), 'snd -10'),
    (Set('a', R('z')), 'set a z'),
    (Mod('a', I(-10)), 'mod a -10'),
    (Receive('z'), 'rcv z'),
    (JumpIfPositive(I(-10), R('a')), 'jgz -10 a'),
])
def test_render(instruction, text):
    assert render(instruction) == text
    assert str(instruction) == text


@pytest.mark.parametrize('instruction', [
    Send(R('q')),
    Send(I(WORD_MIN)),
    Set('z', I(WORD_MAX)),
    Add('a', R('b')),
    Sub('m', I(0)),
    Mul('x', I(-1)),
    Mod('k', R('k')),
    Receive('r'),
    JumpIfPositive(R('a'), I(WORD_MIN)),
    JumpIfNonZero(I(1), I(-1)),
])
def test_round_trip(decoder, instruction):
    assert decoder.decode(instruction.render()) == instruction
