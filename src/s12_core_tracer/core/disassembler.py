# s12_core_tracer/core/disassembler.py
"""
S12 Disassembler

メモリ上のワードを解析し、トレースと同じ "MNEMONIC XX" 形式に変換します。
Instruction Layerのデコードロジックを再利用し、バスアクセスログを汚さないようにpeekで読み出します。
"""
from typing import List

from s12_core_tracer.common.types import MEM_SIZE, DisassemblyLine
from s12_core_tracer.core.instructions import decode_instruction
from s12_core_tracer.transport.bus import Bus

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを逆アセンブルします。S12は全命令が1ワード長です。

    Returns:
        List of (address, binary_word, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, MEM_SIZE)
    for addr in range(max(start_addr, 0), end_addr):
        operation = decode_instruction(bus.peek(addr))
        result.append((addr, operation.encoding, operation.trace_record))
    return result

# @intent:responsibility 0でないセルだけを逆アセンブルします。CLIのリスティング表示用。
def disassemble_nonzero(bus: Bus) -> List[DisassemblyLine]:
    return [line for line in disassemble(bus, 0, MEM_SIZE) if bus.peek(line[0]) != 0]
