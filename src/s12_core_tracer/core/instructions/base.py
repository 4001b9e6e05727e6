# s12_core_tracer/core/instructions/base.py
"""
S12命令実装用の共通定義とユーティリティ。
"""
from enum import IntEnum

from s12_core_tracer.common.types import WORD_BITS, to_address, to_binary, to_word
from s12_core_tracer.core.snapshot import Operation
from s12_core_tracer.transport.bus import Bus

# @intent:map 命令表に定義されたオペコード。これ以外の値は未定義命令（NOP扱い）です。
class Opcode(IntEnum):
    SUB = 0x2
    ADD = 0x3
    LOAD = 0x4
    STORE = 0x5
    LOADI = 0x6
    STOREI = 0x7
    JZ = 0x8
    JN = 0x9
    JMP = 0xA
    HALT = 0xF

_DEFINED_OPCODES = {op.value for op in Opcode}

# @intent:responsibility 12bitの命令ワードをオペコードとオペランドに分解します。
def decode_instruction(word: int) -> Operation:
    """
    bit 11..8 をオペコード、bit 7..0 をオペランド（アドレス）として解釈します。
    """
    word = to_word(word)
    opcode = (word >> 8) & 0xF
    operand = to_address(word)
    defined = opcode in _DEFINED_OPCODES
    mnemonic = Opcode(opcode).name if defined else f"OP{opcode:X}"
    return Operation(
        word=word,
        opcode=opcode,
        operand=operand,
        mnemonic=mnemonic,
        encoding=to_binary(word, WORD_BITS),
        defined=defined,
    )

# @intent:utility_function 間接アドレッシング用に、オペランドが指すセルの下位8bitをポインタとして読み出します。
def read_pointer(bus: Bus, operand: int) -> int:
    return to_address(bus.read(operand))
