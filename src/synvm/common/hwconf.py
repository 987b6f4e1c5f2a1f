MEMORY_SIZE = 32768     # Addressable words
NREGS = 8               # General purpose registers

MAX_VALUE = 32767       # Values are 0..MAX_VALUE
MODULUS = 32768         # Arithmetic wraps at 15 bits

REG_BASE = 32768        # Operand for register 0
REG_LAST = REG_BASE + NREGS - 1

WORD_SIZE = 2           # Bytes per word in a program image
WORD_MASK = 0xFFFF
