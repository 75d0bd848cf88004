class EmulationError(Exception):
    ''' Base of all fatal emulation conditions '''
    index: int | None = None    # 1-based entry or instruction number

    def at(self, index: int):
        self.index = index
        return self


class LoadError(EmulationError):
    section: str | None     # 'Program' or 'Data'

    def __init__(self, message: str, section: str | None = None):
        super().__init__(message)
        self.section = section


class ExecutionError(EmulationError):
    pass


class AddressOutOfBound(ExecutionError):
    pass


class RegisterOutOfBound(ExecutionError):
    pass


class OpcodeMismatch(ExecutionError):
    pass


class WordOutOfRange(ExecutionError):
    pass
