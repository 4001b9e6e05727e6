# s12_core_tracer/core/instructions/load.py
"""
転送命令（直接・間接のロード/ストア）の実装。
"""
from s12_core_tracer.common.types import to_word
from s12_core_tracer.core.snapshot import Operation
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import Bus
from .base import read_pointer

# @intent:responsibility LOAD命令を実行し、メモリの内容をACCに転送します。
def execute_load(state: S12CpuState, bus: Bus, op: Operation) -> None:
    state.acc = to_word(bus.read(op.operand))

# @intent:responsibility STORE命令を実行し、ACCの内容をメモリに書き込みます。
def execute_store(state: S12CpuState, bus: Bus, op: Operation) -> None:
    bus.write(op.operand, state.acc)

# @intent:responsibility LOADI命令を実行します。オペランドのセルはポインタを保持します。
def execute_loadi(state: S12CpuState, bus: Bus, op: Operation) -> None:
    pointer = read_pointer(bus, op.operand)
    state.acc = to_word(bus.read(pointer))

# @intent:responsibility STOREI命令を実行し、ポインタが指すセルにACCを書き込みます。
def execute_storei(state: S12CpuState, bus: Bus, op: Operation) -> None:
    pointer = read_pointer(bus, op.operand)
    bus.write(pointer, state.acc)
