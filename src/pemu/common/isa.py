''' Instruction word layout

    15   14..11   10   9..7   6..3   2..0
    t    opcode   i    op1    op2    op3
'''

from dataclasses import dataclass

from pemu.common.hwconf import WORD_MASK
from pemu.common.ops import ArithmeticOp, TransferOp
from pemu.common.errors import OpcodeMismatch


T_SHIFT, T_MASK = 15, 0x1
OPCODE_SHIFT, OPCODE_MASK = 11, 0xF
I_SHIFT, I_MASK = 10, 0x1
OP1_SHIFT, OP1_MASK = 7, 0x7
OP2_SHIFT, OP2_MASK = 3, 0xF
OP3_SHIFT, OP3_MASK = 0, 0x7


@dataclass(frozen=True)
class Fields:
    t_bit: int
    opcode: int
    i_bit: int
    operand1: int
    operand2: int
    operand3: int


def split(word: int) -> Fields:
    return Fields(
        t_bit=(word >> T_SHIFT) & T_MASK,
        opcode=(word >> OPCODE_SHIFT) & OPCODE_MASK,
        i_bit=(word >> I_SHIFT) & I_MASK,
        operand1=(word >> OP1_SHIFT) & OP1_MASK,
        operand2=(word >> OP2_SHIFT) & OP2_MASK,
        operand3=(word >> OP3_SHIFT) & OP3_MASK,
    )


def join(fields: Fields) -> int:
    parts = [
        (fields.t_bit, T_SHIFT, T_MASK),
        (fields.opcode, OPCODE_SHIFT, OPCODE_MASK),
        (fields.i_bit, I_SHIFT, I_MASK),
        (fields.operand1, OP1_SHIFT, OP1_MASK),
        (fields.operand2, OP2_SHIFT, OP2_MASK),
        (fields.operand3, OP3_SHIFT, OP3_MASK),
    ]

    word = 0

    for value, shift, mask in parts:
        if value < 0 or value > mask:
            raise ValueError(f'Field value {value} does not fit mask 0x{mask:X}')

        word |= value << shift

    return word & WORD_MASK


@dataclass(frozen=True)
class Arithmetic:
    op: ArithmeticOp
    immediate: bool
    dest: int       # operand1
    source: int     # operand2: immediate value or register index
    other: int      # operand3

    def __str__(self) -> str:
        source = f'#{self.source}' if self.immediate else f'r{self.source}'
        return f'{self.op.mnemonic()} r{self.dest}, {source}, r{self.other}'


@dataclass(frozen=True)
class Transfer:
    op: TransferOp
    register: int   # operand1
    address: int    # operand2

    def __str__(self) -> str:
        return f'{self.op.mnemonic()} r{self.register}, {self.address}'


type Instruction = Arithmetic | Transfer


def decode(word: int) -> Instruction:
    f = split(word)

    if f.t_bit == 1:
        if f.opcode not in TransferOp:
            raise OpcodeMismatch("T-Bit is 1 But OPCode isn't a Data Transfer Operation")

        return Transfer(TransferOp(f.opcode), f.operand1, f.operand2)

    if f.opcode not in ArithmeticOp:
        raise OpcodeMismatch("T-Bit is 0 But OPCode isn't an ALU Operation")

    return Arithmetic(
        ArithmeticOp(f.opcode),
        f.i_bit == 1,
        f.operand1,
        f.operand2,
        f.operand3
    )


def encode(instruction: Instruction) -> int:
    match instruction:
        case Transfer(op=op, register=register, address=address):
            fields = Fields(1, int(op), 0, register, address, 0)

        case Arithmetic(op=op, immediate=immediate, dest=dest, source=source, other=other):
            fields = Fields(0, int(op), int(immediate), dest, source, other)

        case _:
            raise ValueError(f'Unknown instruction {instruction}')

    return join(fields)
