# type: ignore
''' Assembly grammar '''

import pyparsing as pp

import synvm.common.ops as ops
from synvm.sasm.fpp import FPP

ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '0': '\0'}


def unescape(body: str) -> str:
    if len(body) == 2:
        return ESCAPES.get(body[1], body[1])

    return body


def g_cmd(literal, op):
    return pp.Keyword(literal).set_parse_action(lambda _: (FPP.issue_op, op))


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Suppress(pp.Regex(r'//[^\n]*'))

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r))

reg_op = pp.Regex(r'r[0-7]\b').set_parse_action(lambda r: (FPP.on_reg, int(r[0][1])))

hex_const = pp.Regex('0[xX][0-9a-fA-F]+').set_parse_action(lambda r: (FPP.on_value, int(r[0], 16)))
dec_const = pp.Regex('[0-9]+').set_parse_action(lambda r: (FPP.on_value, int(r[0])))
us_const = hex_const ^ dec_const

char_const = pp.Regex(r"'(\\.|[^'\\])'").set_parse_action(lambda r: (FPP.on_char, unescape(r[0][1:-1])))

text = pp.QuotedString('"', esc_char='\\')

ns_id = pp.Word(pp.alphas + "_", pp.alphanums + "_.")

# Grouped into [namespace, name] or [name]
refname = pp.Group(pp.Optional(ns_id + pp.Suppress("::")) + id)

ref = (pp.Suppress("&") + refname).set_parse_action(lambda r: (FPP.on_ref, list(r[0])))

operand = reg_op ^ us_const ^ char_const ^ ref


def g_instruction(mnemonic, op):
    cmd = g_cmd(mnemonic, op)

    for _ in range(ops.ARGS[op]):
        cmd = cmd + operand

    return cmd


asm_cmd = pp.Or([g_instruction(mnemonic, op) for mnemonic, op in ops.MNEMONICS.items()])

# DATA <value|"text">...
data_text = text.copy().set_parse_action(lambda r: (FPP.issue_text, r[0]))
data = pp.Suppress(pp.Keyword('DATA')) + pp.OneOrMore(operand ^ data_text)

# PRINT "<text>"
print_text = (pp.Suppress(pp.Keyword('PRINT')) + text).set_parse_action(lambda r: (FPP.issue_print, r[0]))

# Fail on unknown command
unknown = pp.Regex(".+").set_parse_action(lambda r: (FPP.on_fail, r))

cmd = asm_cmd ^ data ^ print_text

statement = pp.Optional(label) + cmd + pp.ZeroOrMore(comment)
bare_label = label + pp.ZeroOrMore(comment)

program = pp.ZeroOrMore(statement ^ bare_label ^ comment ^ unknown)
