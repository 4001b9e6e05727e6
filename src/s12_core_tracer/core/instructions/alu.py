# s12_core_tracer/core/instructions/alu.py
"""
算術演算命令の実装。
S12にはフラグレジスタが無いため、結果を12bitに縮小するだけです。
"""
from s12_core_tracer.common.types import to_word
from s12_core_tracer.core.snapshot import Operation
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import Bus

# @intent:responsibility ADD命令を実行します (mod 4096)。
def execute_add(state: S12CpuState, bus: Bus, op: Operation) -> None:
    state.acc = to_word(state.acc + bus.read(op.operand))

# @intent:responsibility SUB命令を実行します (mod 4096)。
def execute_sub(state: S12CpuState, bus: Bus, op: Operation) -> None:
    state.acc = to_word(state.acc - bus.read(op.operand))
