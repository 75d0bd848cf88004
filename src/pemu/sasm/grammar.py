# type: ignore
''' Assembler grammar '''

import pyparsing as pp

import pemu.common.ops as ops
from pemu.sasm.builder import Builder


comment = pp.Suppress(pp.Literal('//') + pp.rest_of_line)
comma = pp.Suppress(',')

reg = pp.Regex(r'r[0-7]\b').set_parse_action(lambda r: int(r[0][1:]))

hex_const = pp.Regex('0x[0-9a-fA-F]+').set_parse_action(lambda r: int(r[0], 16))
bin_const = pp.Regex('0b[01]+').set_parse_action(lambda r: int(r[0][2:], 2))
dec_const = pp.Regex('[0-9]+').set_parse_action(lambda r: int(r[0]))
us_const = hex_const | bin_const | dec_const

immediate = pp.Suppress('#') + us_const


def g_arithm(literal, op):
    head = pp.Suppress(pp.Keyword(literal))

    reg_form = (head + reg + comma + reg + comma + reg).set_parse_action(
        lambda r: (Builder.issue_arithm, [op, False, r[0], r[1], r[2]])
    )

    imm_form = (head + reg + comma + immediate + comma + reg).set_parse_action(
        lambda r: (Builder.issue_arithm, [op, True, r[0], r[1], r[2]])
    )

    return reg_form | imm_form


def g_transfer(literal, op):
    return (pp.Suppress(pp.Keyword(literal)) + reg + comma + us_const).set_parse_action(
        lambda r: (Builder.issue_transfer, [op, r[0], r[1]])
    )


# Arithmetic
add_cmd = g_arithm('add', ops.ADD)
sub_cmd = g_arithm('sub', ops.SUB)
and_cmd = g_arithm('and', ops.AND)
or_cmd = g_arithm('or', ops.OR)
xor_cmd = g_arithm('xor', ops.XOR)

# Data transfer
load_cmd = g_transfer('load', ops.LOAD)
store_cmd = g_transfer('store', ops.STORE)

# Directives
word_dir = (pp.Suppress(pp.Keyword('.word')) + us_const).set_parse_action(
    lambda r: (Builder.on_word, r)
)
data_dir = (pp.Suppress(pp.Keyword('.data')) + us_const + comma + us_const).set_parse_action(
    lambda r: (Builder.issue_data, r)
)

# Fail on unknown command
unknown = pp.Regex('.+').set_parse_action(lambda r: (Builder.on_fail, r))

cmd = add_cmd \
    | sub_cmd \
    | and_cmd \
    | or_cmd \
    | xor_cmd \
    | load_cmd \
    | store_cmd \
    | word_dir \
    | data_dir

statement = cmd + pp.Optional(comment)
program = pp.ZeroOrMore(statement | comment | unknown)
