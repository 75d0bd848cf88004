''' Binary-string tokens of program and data files '''

import pyparsing as pp

from pemu.common.hwconf import WORD_MASK, DATA_ADDRESS_WIDTH


def bits_to_word(bits: str) -> int:
    # Most significant bit first, truncated to the word width
    value = 0

    for bit in bits:
        value = (value * 2 + int(bit)) & WORD_MASK

    return value


def word_to_bits(word: int, width: int = 16) -> str:
    return format(word, f'0{width}b')


bits = pp.Word('01')

program_line = bits.copy().set_parse_action(lambda r: bits_to_word(r[0]))

# "<address><separator><value>", the separator is any single non-binary character
data_line = pp.Regex(
    f'(?P<address>[01]{{{DATA_ADDRESS_WIDTH}}})[^01](?P<value>[01]+)'
).leave_whitespace().set_parse_action(
    lambda r: (bits_to_word(r['address']), bits_to_word(r['value']))
)


def parse_program_line(line: str) -> int:
    return program_line.parse_string(line.strip(), parse_all=True)[0]


def parse_data_line(line: str) -> tuple[int, int]:
    return data_line.parse_string(line.rstrip('\r\n'), parse_all=True)[0]


def format_data_line(address: int, value: int) -> str:
    return f'{word_to_bits(address, DATA_ADDRESS_WIDTH)} {word_to_bits(value)}'
