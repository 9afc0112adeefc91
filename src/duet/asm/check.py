import sys
from pathlib import Path
import logging as lg
from typing import List, Tuple

import click

from duet.common.errors import MalformedInstruction, MalformedOperand
from duet.asm.grammar import Decoder
from duet.asm.program import check


EXIT_VALID = 0
EXIT_INVALID = 1


def check_file(decoder: Decoder, filepath: Path) -> List[MalformedInstruction]:
    lg.debug(f'Checking file {filepath}')
    return check(filepath.read_text(), decoder)


def describe(filepath: Path, error: MalformedInstruction) -> str:
    cause = error.__cause__
    detail = f': {cause}' if isinstance(cause, MalformedOperand) else ''
    return f'{filepath}:{error.lineno}: {error}{detail}'


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
def run(verbose: bool, sources: Tuple[Path]):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("DUET CHECK")

    decoder = Decoder()
    failed = 0

    for source in sources:
        try:
            errors = check_file(decoder, source)
        except OSError as e:
            click.echo(f'{source}: {e.strerror or e}')
            failed += 1
            continue

        for error in errors:
            click.echo(describe(source, error))

        if errors:
            failed += 1

    lg.info(f'{len(sources) - failed} of {len(sources)} files valid')
    sys.exit(EXIT_INVALID if failed else EXIT_VALID)


if __name__ == '__main__':
    run()
