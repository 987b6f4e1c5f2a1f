import logging as lg
from typing import List, Tuple, Dict, Any

from synvm.common.hwconf import MAX_VALUE, REG_BASE
import synvm.common.ops as ops

Tokens = List[Any]


class AsmError(Exception):
    pass


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, int | str]]
    label_dict: Dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.namespace = "<global>"
        self.label_dict = dict()

    def get_qualified_name(self, name: str, namespace: str | None = None):
        if namespace is None:
            namespace = self.namespace

        qname = namespace + '::' + name
        return qname

    def resolve_name(self, tokens: Tokens):
        if len(tokens) == 1:
            # Unqualified
            name = self.get_qualified_name(tokens[0])
        else:
            # Qualified
            name = self.get_qualified_name(tokens[1], tokens[0])  # name, namespace

        return name

    # Handlers
    def issue_word(self, word: int):
        self.cmd_list.append(('word', word))
        self.offset += 1

    def issue_op(self, op: int):
        lg.debug(f'Issuing {ops.name(op)} @ {self.offset}')
        self.issue_word(op)

    def on_value(self, word: int):
        if not 0 <= word <= MAX_VALUE:
            raise AsmError(f'Literal {word} is out of range in {self.namespace}')

        self.issue_word(word)

    def on_reg(self, index: int):
        self.issue_word(REG_BASE + index)

    def on_char(self, char: str):
        self.on_value(ord(char))

    def on_label(self, tokens: Tokens):
        labelname = tokens[0]
        qlabelname = self.get_qualified_name(labelname)

        if qlabelname in self.label_dict:
            raise AsmError(f'Duplicate label {qlabelname}')

        self.label_dict[qlabelname] = self.offset
        lg.debug(f'Label {qlabelname} @ {self.offset}')

    def on_ref(self, refname: Tokens):
        labelname = self.resolve_name(refname)

        lg.debug(f'Ref {labelname}')

        self.cmd_list.append(('ref', labelname))
        self.offset += 1  # placeholder-word

    # Macros
    def issue_text(self, text: str):
        for char in text:
            self.on_char(char)

    # PRINT "<text>"
    def issue_print(self, text: str):
        for char in text:
            self.issue_op(ops.OUT)
            self.on_char(char)

    def on_fail(self, rest: Tokens):
        raise AsmError(f'Unknown command {rest[0]} in {self.namespace}')
