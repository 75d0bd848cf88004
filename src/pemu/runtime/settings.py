from pathlib import Path
import logging as lg
import tomllib

from pemu.common.hwconf import DEFAULT_PROGRAM_FILE, DEFAULT_DATA_FILE


class EmulatorSettings:
    program: Path
    data: Path
    verbose: bool

    def __init__(self):
        self.program = Path(DEFAULT_PROGRAM_FILE)
        self.data = Path(DEFAULT_DATA_FILE)
        self.verbose = False

    def update(
        self,
        program: Path | str | None = None,
        data: Path | str | None = None,
        verbose: bool | None = None
    ):
        if program is not None:
            self.program = Path(program)

        if data is not None:
            self.data = Path(data)

        if verbose is not None:
            self.verbose = verbose

        return self


def load_settings(config_path: Path) -> EmulatorSettings:
    ''' Reads the [emulator] table of a TOML file, relative paths
        are resolved against the file's directory '''
    config = tomllib.loads(config_path.read_text())
    section = config.get('emulator', {})
    base_dir = config_path.parent

    lg.debug(f'Loading settings from {config_path}: {section}')

    settings = EmulatorSettings()

    if 'program' in section:
        settings.update(program=base_dir / section['program'])

    if 'data' in section:
        settings.update(data=base_dir / section['data'])

    return settings.update(verbose=section.get('verbose'))
