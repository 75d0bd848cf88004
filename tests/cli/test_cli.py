# type: ignore
import logging

import pytest
from click.testing import CliRunner

import pemu.runtime.emulator as emulator
import pemu.runtime.loader as loader
import pemu.runtime.cpu as cpu
from pemu.common.errors import LoadError
from pemu.runtime.settings import EmulatorSettings, load_settings

from unit_utils import load_file, registers
from fixtures import machine_files, restore_log_level  # noqa: F401


def invoke(*args):
    return CliRunner().invoke(emulator.run, [str(a) for a in args])


def test_format_registers():
    table = emulator.format_registers(registers(r0=5, r7=65535))

    assert table == '\n'.join([
        '',
        '\t--------',
        '\tRn Value',
        '\t--------',
        '\tR0     5',
        '\tR1     0',
        '\tR2     0',
        '\tR3     0',
        '\tR4     0',
        '\tR5     0',
        '\tR6     0',
        '\tR7 65535',
        '\t--------',
        '',
    ])


def test_run_reports_registers(machine_files):  # noqa: F811
    program, data = machine_files('1010100001000000\n', '1000 0000000000000101\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_HALT
    assert emulator.format_registers(registers(r0=5)) in result.stdout


def test_run_missing_data_file(machine_files, tmp_path):  # noqa: F811
    program, _ = machine_files('0000000000001000\n')
    missing = tmp_path / 'missing.txt'

    result = invoke('-p', program, '-d', missing)

    assert result.exit_code == emulator.EXIT_LOAD_ERROR
    assert f'Error in Opening the {missing} File' in result.stdout
    assert 'Rn Value' not in result.stdout


def test_run_malformed_program(machine_files):  # noqa: F811
    program, data = machine_files('0000000000001000\n00000000000x1000\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_LOAD_ERROR
    assert f'Error in 2th Program in {program} File: Malformed line' in result.stdout


def test_run_execution_error(machine_files):  # noqa: F811
    program, data = machine_files('0000010010001001\n0010100000000000\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_EXEC_ERROR
    assert (
        f"Error in 2th Machine Code in {program} File: "
        "T-Bit is 0 But OPCode isn't an ALU Operation"
    ) in result.stdout


def test_run_register_out_of_bound(machine_files):  # noqa: F811
    program, data = machine_files('0000000101100000\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_EXEC_ERROR
    assert 'Error in 1th Machine Code' in result.stdout
    assert 'Register Index (Operand 2) is Out Of Bound' in result.stdout


def test_run_with_config(tmp_path):
    (tmp_path / 'prog.txt').write_text(load_file('testdata/files/sum.txt'))
    (tmp_path / 'values.txt').write_text(load_file('testdata/files/sum_data.txt'))
    config = tmp_path / 'pemu.toml'
    config.write_text('[emulator]\nprogram = "prog.txt"\ndata = "values.txt"\n')

    result = invoke('-c', config)

    assert result.exit_code == emulator.EXIT_HALT
    assert emulator.format_registers(registers(r0=3, r1=4, r2=7, r3=7)) in result.stdout


def test_option_overrides_config(tmp_path, machine_files):  # noqa: F811
    program, data = machine_files('0000010010001001\n')
    config = tmp_path / 'pemu.toml'
    config.write_text('[emulator]\nprogram = "elsewhere.txt"\n')

    result = invoke('-c', config, '-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_HALT
    assert emulator.format_registers(registers(r1=1)) in result.stdout


def test_run_malformed_data(machine_files):  # noqa: F811
    program, data = machine_files('0000010010001001\n', '0001 1\n0010 12\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_LOAD_ERROR
    assert f'Error in 2th Data in {data} File: Malformed line' in result.stdout


def test_describe_data_address_error():
    with pytest.raises(LoadError) as e:
        loader.load_data(cpu.Processor(), [(3, 1), (512, 7)])

    assert emulator.describe(e.value, EmulatorSettings()) == (
        'Error in 2th Data in data.txt File: Memory Address exceeds Memory Size 512'
    )


def test_run_blank_program_line_keeps_addresses(machine_files):  # noqa: F811
    # line 2 is the zero word (add r0, r0, r0), line 3 the failing one
    program, data = machine_files('0000010010001001\n\n0010100000000000\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_EXEC_ERROR
    assert f'Error in 3th Machine Code in {program} File' in result.stdout


def test_run_verbose_traces_instructions(machine_files, caplog, restore_log_level):  # noqa: F811
    program, data = machine_files('0000010010001001\n')

    result = invoke('-v', '-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_HALT
    assert logging.getLogger().level == logging.DEBUG
    assert 'add r1, #1, r1' in caplog.text
    assert 'R1:1' in caplog.text


def test_run_quiet_skips_trace(machine_files, caplog, restore_log_level):  # noqa: F811
    program, data = machine_files('0000010010001001\n')

    result = invoke('-p', program, '-d', data)

    assert result.exit_code == emulator.EXIT_HALT
    assert 'add r1, #1, r1' not in caplog.text
    assert 'PEMU' in caplog.text


def test_verbose_from_config(tmp_path):
    config = tmp_path / 'pemu.toml'
    config.write_text('[emulator]\nverbose = true\n')

    settings = load_settings(config)

    assert settings.verbose
    assert settings.program.name == 'program.txt'


def test_verbose_defaults_off(tmp_path):
    config = tmp_path / 'pemu.toml'
    config.write_text('[emulator]\nprogram = "p.txt"\n')

    settings = load_settings(config)

    assert not settings.verbose
    assert settings.program == tmp_path / 'p.txt'
