from enum import IntEnum


# Arithmetic-logical (t-bit 0)
ADD = 0x0   # R[op2] or #op2  +  R[op3] -> R[op1]
SUB = 0x1   # R[op2] or #op2  -  R[op3] -> R[op1]
AND = 0x2   # R[op2] or #op2  &  R[op3] -> R[op1]
OR = 0x3    # R[op2] or #op2  |  R[op3] -> R[op1]
XOR = 0x4   # R[op2] or #op2  ^  R[op3] -> R[op1]

# Data transfer (t-bit 1)
LOAD = 0x5   # M[op2] -> R[op1]
STORE = 0x6  # R[op1] -> M[op2]


class ArithmeticOp(IntEnum):
    ADD = ADD
    SUB = SUB
    AND = AND
    OR = OR
    XOR = XOR

    def mnemonic(self) -> str:
        return self.name.lower()


class TransferOp(IntEnum):
    LOAD = LOAD
    STORE = STORE

    def mnemonic(self) -> str:
        return self.name.lower()

