HALT = 0    # stop
SET = 1     # b -> a
PUSH = 2    # a -> [stack]
POP = 3     # [stack] -> a
EQ = 4      # b == c -> a
GT = 5      # b > c -> a
JMP = 6     # goto a
JT = 7      # if a != 0 goto b
JF = 8      # if a == 0 goto b
ADD = 9     # b + c -> a
MULT = 10   # b * c -> a
MOD = 11    # b % c -> a
AND = 12    # b & c -> a
OR = 13     # b | c -> a
NOT = 14    # ~b -> a
RMEM = 15   # M[b] -> a
WMEM = 16   # b -> M[a]
CALL = 17   # push next; goto a
RET = 18    # goto [stack]
OUT = 19    # a -> terminal
IN = 20     # terminal -> a
NOOP = 21

NAMES = (
    'halt', 'set', 'push', 'pop', 'eq', 'gt', 'jmp', 'jt', 'jf', 'add', 'mult',
    'mod', 'and', 'or', 'not', 'rmem', 'wmem', 'call', 'ret', 'out', 'in', 'noop'
)

ARGS = (
    0, 2, 1, 1, 3, 3, 1, 2, 2, 3, 3,
    3, 3, 3, 2, 2, 2, 1, 0, 1, 1, 0
)

MNEMONICS = {name: op for op, name in enumerate(NAMES)}


def is_valid(op: int) -> bool:
    return 0 <= op < len(NAMES)


def name(op: int) -> str:
    return NAMES[op].upper() if is_valid(op) else f'<{op}>'


def width(op: int) -> int:
    ''' Instruction length in words, opcode included '''
    return 1 + ARGS[op]
