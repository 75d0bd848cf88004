from typing import Iterator

from pemu.common.hwconf import WORD_MASK
from pemu.common.errors import ExecutionError, AddressOutOfBound, RegisterOutOfBound, WordOutOfRange


class WordArray:
    ''' Fixed-size array of 16-bit words, sized once at construction '''
    name: str
    index_error: type[ExecutionError] = ExecutionError

    def __init__(self, size: int, fill: int):
        self.check_word(fill)
        self.words = [fill] * size

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

    def __getitem__(self, index: int) -> int:
        self.check_index(index)
        return self.words[index]

    def __setitem__(self, index: int, value: int):
        self.check_index(index)
        self.check_word(value)
        self.words[index] = value

    def check_index(self, index: int):
        if index < 0 or index >= len(self.words):
            raise self.index_error(
                f'{self.name} index {index} is out of bound {len(self.words)}'
            )

    def check_word(self, value: int):
        if value < 0 or value > WORD_MASK:
            raise WordOutOfRange(f'Value {value} does not fit a 16-bit word')

    def snapshot(self) -> list[int]:
        return list(self.words)


class Memory(WordArray):
    name = 'Memory'
    index_error = AddressOutOfBound


class RegisterFile(WordArray):
    name = 'Register'
    index_error = RegisterOutOfBound

    def __init__(self, size: int):
        super().__init__(size, 0)
