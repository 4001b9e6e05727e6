# s12_core_tracer/core/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from .base import Opcode
from . import load
from . import alu
from . import control

# @intent:map Opcodeから実行関数へのマッピングテーブル。全ての定義済みOpcodeを網羅します。
EXECUTE_MAP = {
    # Load/Store
    Opcode.LOAD: load.execute_load,
    Opcode.STORE: load.execute_store,
    Opcode.LOADI: load.execute_loadi,
    Opcode.STOREI: load.execute_storei,

    # ALU
    Opcode.ADD: alu.execute_add,
    Opcode.SUB: alu.execute_sub,

    # Control
    Opcode.JZ: control.execute_jz,
    Opcode.JN: control.execute_jn,
    Opcode.JMP: control.execute_jmp,
    Opcode.HALT: control.execute_halt,
}
