from pathlib import Path
import logging as lg

import click

import pemu.sasm.grammar as grammar
from pemu.sasm.builder import Builder
import pemu.common.codec as codec


def compile_source(contents: str) -> Builder:
    builder = Builder()
    actions = grammar.program.parse_string(contents, parse_all=True)

    for (func, arg) in actions:  # type: ignore
        func(builder, arg)

    lg.info(f'Assembled {len(builder.program)} words, {len(builder.data)} data entries')
    return builder


def program_text(builder: Builder) -> str:
    return ''.join(f'{codec.word_to_bits(word)}\n' for word in builder.program)


def data_text(builder: Builder) -> str:
    return ''.join(f'{codec.format_data_line(a, v)}\n' for a, v in builder.data)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('program', type=Path)
@click.argument('data', type=Path, required=False)
def assemble(verbose: bool, source: Path, program: Path, data: Path | None):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("PEMU ASM")

    builder = compile_source(source.read_text())

    program.parent.mkdir(parents=True, exist_ok=True)
    program.write_text(program_text(builder))

    if data is not None:
        data.parent.mkdir(parents=True, exist_ok=True)
        data.write_text(data_text(builder))
    elif builder.data:
        lg.warning('Data entries ignored, no data file given')


if __name__ == '__main__':
    assemble()
