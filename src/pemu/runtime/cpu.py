import logging as lg
from enum import Enum
from typing import Callable

from pemu.common.hwconf import MEMORY_SIZE, REGISTER_COUNT, EMPTY_VALUE, WORD_MASK
import pemu.common.ops as ops
import pemu.common.isa as isa
from pemu.common.errors import ExecutionError, AddressOutOfBound, RegisterOutOfBound
from pemu.runtime.storage import Memory, RegisterFile


class State(Enum):
    RUNNING = 'running'
    HALTED_NORMAL = 'halted normally'
    HALTED_ERROR = 'halted on error'


class HaltReason(Enum):
    SENTINEL = 'empty word fetched'
    END_OF_MEMORY = 'program counter ran off the end of memory'
    ERROR = 'fatal error'


class Processor():
    memory: Memory
    registers: RegisterFile
    program_counter: int
    state: State
    halt_reason: HaltReason | None

    def __init__(self):
        self.memory = Memory(MEMORY_SIZE, EMPTY_VALUE)
        self.registers = RegisterFile(REGISTER_COUNT)
        self.program_counter = 0

        self.state = State.RUNNING
        self.halt_reason = None

    # - Helpers - #

    def debug_dump(self):
        state = [f'PC:{self.program_counter:X}']
        state.extend([f'R{i}:{v:X}' for i, v in enumerate(self.registers)])
        lg.debug(' '.join(state))

    def halt(self, reason: HaltReason):
        if reason == HaltReason.ERROR:
            self.state = State.HALTED_ERROR
        else:
            self.state = State.HALTED_NORMAL

        self.halt_reason = reason
        lg.info(f'Processor halted: {reason.value} (PC:{self.program_counter})')

    def is_running(self) -> bool:
        return self.state == State.RUNNING

    def first_operand(self, instruction: isa.Arithmetic) -> int:
        if instruction.immediate:
            return instruction.source

        if instruction.source >= len(self.registers):
            raise RegisterOutOfBound('Register Index (Operand 2) is Out Of Bound')

        return self.registers[instruction.source]

    def arithm_pair(self, instruction: isa.Arithmetic, op: Callable[[int, int], int]):
        a = self.first_operand(instruction)
        b = self.registers[instruction.other]
        self.registers[instruction.dest] = op(a, b) & WORD_MASK

    def check_address(self, address: int):
        if address >= len(self.memory):
            raise AddressOutOfBound(
                f'Memory Address (Operand 2) exceeds Memory Size {len(self.memory)}'
            )

    # - Arithmetic - #

    def add(self, instruction: isa.Arithmetic):
        self.arithm_pair(instruction, lambda a, b: a + b)

    def sub(self, instruction: isa.Arithmetic):
        self.arithm_pair(instruction, lambda a, b: a - b)

    def band(self, instruction: isa.Arithmetic):
        self.arithm_pair(instruction, lambda a, b: a & b)

    def bor(self, instruction: isa.Arithmetic):
        self.arithm_pair(instruction, lambda a, b: a | b)

    def xor(self, instruction: isa.Arithmetic):
        self.arithm_pair(instruction, lambda a, b: a ^ b)

    # - Data transfer - #

    def load(self, instruction: isa.Transfer):
        self.check_address(instruction.address)
        self.registers[instruction.register] = self.memory[instruction.address]

    def store(self, instruction: isa.Transfer):
        self.check_address(instruction.address)
        self.memory[instruction.address] = self.registers[instruction.register]

    HANDLERS = {
        ops.ArithmeticOp.ADD: add,
        ops.ArithmeticOp.SUB: sub,
        ops.ArithmeticOp.AND: band,
        ops.ArithmeticOp.OR: bor,
        ops.ArithmeticOp.XOR: xor,

        ops.TransferOp.LOAD: load,
        ops.TransferOp.STORE: store
    }

    # -- Implementation -- #

    def fetch(self) -> int | None:
        ''' Returns the next word and advances the program counter,
            or halts and returns None at the end of the program '''
        if self.program_counter >= len(self.memory):
            self.halt(HaltReason.END_OF_MEMORY)
            return None

        word = self.memory[self.program_counter]

        if word == EMPTY_VALUE:
            self.halt(HaltReason.SENTINEL)
            return None

        self.program_counter += 1
        return word

    def execute(self, instruction: isa.Instruction):
        handler = self.HANDLERS[instruction.op]
        handler(self, instruction)

    def step(self) -> bool:
        ''' Performs one fetch-decode-execute transition,
            returns False once the processor is halted '''
        if not self.is_running():
            return False

        word = self.fetch()

        if word is None:
            return False

        try:
            instruction = isa.decode(word)
            lg.debug(f'{self.program_counter:03} {word:04X} {instruction}')
            self.execute(instruction)

        except ExecutionError as e:
            # PC points past the failing word: its 1-based index
            e.at(self.program_counter)
            self.halt(HaltReason.ERROR)
            raise

        return True
