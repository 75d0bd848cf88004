import logging as lg
from pathlib import Path
from typing import Callable, Iterable, TypeVar

import pyparsing as pp

from pemu.common.errors import LoadError, WordOutOfRange
import pemu.common.codec as codec
from pemu.runtime.cpu import Processor


type DataEntry = tuple[int, int]
T = TypeVar('T')

PROGRAM = 'Program'
DATA = 'Data'


def load_program(proc: Processor, words: Iterable[int]):
    memory_size = len(proc.memory)
    count = 0

    for index, word in enumerate(words):
        if index >= memory_size:
            raise LoadError(
                f'Program exceeds Memory Size {memory_size}', PROGRAM
            ).at(index + 1)

        try:
            proc.memory[index] = word
        except WordOutOfRange as e:
            raise LoadError(str(e), PROGRAM).at(index + 1) from e

        count += 1

    lg.debug(f'Loaded {count} program words')


def load_data(proc: Processor, entries: Iterable[DataEntry]):
    memory_size = len(proc.memory)

    for number, (address, value) in enumerate(entries, start=1):
        if address < 0 or address >= memory_size:
            raise LoadError(
                f'Memory Address exceeds Memory Size {memory_size}', DATA
            ).at(number)

        # No write protection: data may overwrite program words
        try:
            proc.memory[address] = value
        except WordOutOfRange as e:
            raise LoadError(str(e), DATA).at(number) from e

        lg.debug(f'Data M[{address}] = {value}')


def read_lines(path: Path) -> list[str]:
    if not path.exists():
        raise LoadError(f'Error in Opening the {path} File')

    return path.read_text().splitlines()


def parse_lines(
    path: Path,
    section: str,
    parse: Callable[[str], T],
    blank: T | None = None
) -> list[T]:
    ''' Blank lines become `blank`, or are skipped when it is None '''
    values: list[T] = []

    for number, line in enumerate(read_lines(path), start=1):
        if not line.strip():
            if blank is not None:
                values.append(blank)

            continue

        try:
            values.append(parse(line))
        except pp.ParseException as e:
            raise LoadError(f'Malformed line "{line}" ({e.msg})', section).at(number) from e

    lg.info(f'Read {len(values)} entries from {path}')
    return values


def read_program(path: Path) -> list[int]:
    # A blank line is an all-zero word, so addresses follow line numbers
    return parse_lines(path, PROGRAM, codec.parse_program_line, blank=0)


def read_data(path: Path) -> list[DataEntry]:
    return parse_lines(path, DATA, codec.parse_data_line)


def load_files(proc: Processor, program_path: Path, data_path: Path):
    # Both files are checked before anything is loaded
    program = read_program(program_path)
    data = read_data(data_path)

    load_program(proc, program)
    load_data(proc, data)
