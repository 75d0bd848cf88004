import sys
from pathlib import Path
from dataclasses import dataclass, field
from typing import Iterable
import logging as lg

import click

from pemu.common.errors import EmulationError, ExecutionError, LoadError
from pemu.runtime.settings import EmulatorSettings, load_settings
import pemu.runtime.loader as loader
import pemu.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_LOAD_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


@dataclass
class Outcome:
    reason: cpu.HaltReason
    steps: int = 0
    registers: list[int] = field(default_factory=list)
    error: EmulationError | None = None

    def halted_normally(self) -> bool:
        return self.reason != cpu.HaltReason.ERROR


def execute(proc: cpu.Processor) -> Outcome:
    ''' Runs the fetch-execute loop until the processor halts '''
    steps = 0

    try:
        while proc.step():
            steps += 1
            proc.debug_dump()

    except ExecutionError as e:
        return Outcome(cpu.HaltReason.ERROR, steps, proc.registers.snapshot(), e)

    assert proc.halt_reason is not None
    return Outcome(proc.halt_reason, steps, proc.registers.snapshot())


def emulate(
    program: Iterable[int],
    data: Iterable[loader.DataEntry] = (),
    proc: cpu.Processor | None = None
) -> Outcome:
    ''' Loads the program, then the data, then executes '''
    if proc is None:
        proc = cpu.Processor()

    try:
        loader.load_program(proc, program)
        loader.load_data(proc, data)

    except LoadError as e:
        proc.halt(cpu.HaltReason.ERROR)
        return Outcome(cpu.HaltReason.ERROR, 0, proc.registers.snapshot(), e)

    return execute(proc)


def format_registers(registers: Iterable[int]) -> str:
    lines = ['', '\t--------', '\tRn Value', '\t--------']
    lines.extend(f'\tR{i} {value:5}' for i, value in enumerate(registers))
    lines.extend(['\t--------', ''])
    return '\n'.join(lines)


def configure_logging(verbose: bool):
    level = lg.DEBUG if verbose else lg.INFO
    lg.basicConfig(level=level)
    # basicConfig does not touch the level once handlers exist
    lg.getLogger().setLevel(level)


def describe(error: EmulationError, settings: EmulatorSettings) -> str:
    if isinstance(error, LoadError):
        if error.index is None:
            return str(error)

        path = settings.program if error.section == loader.PROGRAM else settings.data
        return f'Error in {error.index}th {error.section} in {path} File: {error}'

    return f'Error in {error.index}th Machine Code in {settings.program} File: {error}'


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-c', '--config', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='TOML file with an [emulator] table')
@click.option('-p', '--program', type=Path, help='Program file (binary words)')
@click.option('-d', '--data', type=Path, help='Data file (address and value)')
def run(verbose: bool, config: Path | None, program: Path | None, data: Path | None):
    settings = load_settings(config) if config is not None else EmulatorSettings()
    settings.update(program=program, data=data, verbose=verbose or None)

    configure_logging(settings.verbose)
    lg.info("PEMU")

    proc = cpu.Processor()

    try:
        loader.load_files(proc, settings.program, settings.data)
        outcome = execute(proc)

    except LoadError as e:
        lg.info('Execution aborted on load error')
        click.echo(describe(e, settings))
        sys.exit(EXIT_LOAD_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    if outcome.error is not None:
        lg.info(f'Execution halted on error after {outcome.steps} steps')
        click.echo(describe(outcome.error, settings))
        sys.exit(EXIT_EXEC_ERROR)

    lg.info(f'Execution halted gracefully after {outcome.steps} steps')
    click.echo(format_registers(outcome.registers))
    sys.exit(EXIT_HALT)


if __name__ == '__main__':
    run()
