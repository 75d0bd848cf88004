import logging as lg
from typing import List, Tuple, Any

from pemu.common.hwconf import WORD_MASK, DATA_ADDRESS_WIDTH
from pemu.common.ops import ArithmeticOp, TransferOp
import pemu.common.isa as isa

Tokens = List[Any]


class Builder:
    ''' Collects program words and data entries in source order '''
    program: List[int]
    data: List[Tuple[int, int]]

    def __init__(self):
        self.program = list()
        self.data = list()

    def issue_word(self, word: int):
        if word < 0 or word > WORD_MASK:
            raise UserWarning(f'Word {word} does not fit 16 bits')

        lg.debug(f'Issuing word {len(self.program)}: 0x{word:04X}')
        self.program.append(word)

    def issue_instruction(self, instruction: isa.Instruction):
        lg.debug(f'Instruction {instruction}')
        self.issue_word(isa.encode(instruction))

    # op rD, rA, rB | op rD, #imm, rB
    def issue_arithm(self, tokens: Tokens):
        op, immediate, dest, source, other = tokens

        if immediate and source > isa.OP2_MASK:
            raise UserWarning(f'Immediate {source} does not fit 4 bits')

        self.issue_instruction(isa.Arithmetic(ArithmeticOp(op), immediate, dest, source, other))

    # load rD, addr | store rS, addr
    def issue_transfer(self, tokens: Tokens):
        op, register, address = tokens

        if address > isa.OP2_MASK:
            raise UserWarning(f'Transfer address {address} does not fit 4 bits')

        self.issue_instruction(isa.Transfer(TransferOp(op), register, address))

    # .word value
    def on_word(self, tokens: Tokens):
        self.issue_word(int(tokens[0]))

    # .data addr, value
    def issue_data(self, tokens: Tokens):
        address, value = int(tokens[0]), int(tokens[1])

        if address >= 1 << DATA_ADDRESS_WIDTH:
            raise UserWarning(f'Data address {address} does not fit {DATA_ADDRESS_WIDTH} bits')

        if value > WORD_MASK:
            raise UserWarning(f'Data value {value} does not fit 16 bits')

        lg.debug(f'Data M[{address}] = {value}')
        self.data.append((address, value))

    def on_fail(self, rest: Tokens):
        raise UserWarning(f'Unknown command {rest[0]}')
