MEMORY_SIZE = 512       # words
REGISTER_COUNT = 8

WORD_BITS = 16
WORD_MASK = (1 << WORD_BITS) - 1
EMPTY_VALUE = 0xFFFF    # Unused memory; ends the program when fetched

DATA_ADDRESS_WIDTH = 4  # Address characters in a data file line

DEFAULT_PROGRAM_FILE = 'program.txt'
DEFAULT_DATA_FILE = 'data.txt'
