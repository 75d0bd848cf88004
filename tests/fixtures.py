# type: ignore
import logging

import pytest

import pemu.runtime.cpu as cpu


@pytest.fixture
def proc():
    yield cpu.Processor()


@pytest.fixture
def machine_files(tmp_path):
    ''' Writes program and data files, returns their paths '''
    def write(program: str, data: str = ''):
        program_path = tmp_path / 'program.txt'
        data_path = tmp_path / 'data.txt'
        program_path.write_text(program)
        data_path.write_text(data)
        return program_path, data_path

    yield write


@pytest.fixture
def restore_log_level():
    ''' The emulator command sets the root logger level '''
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
