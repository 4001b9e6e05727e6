# s12_core_tracer/core/instructions/control.py
"""
制御命令（分岐、ジャンプ、HALT）と未定義命令の実装。
実行時点でPCは既に次の命令を指しています。
"""
from s12_core_tracer.common.types import to_address
from s12_core_tracer.core.snapshot import Operation
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import Bus

# @intent:responsibility JZ命令を実行し、ACCが0なら分岐します。
def execute_jz(state: S12CpuState, bus: Bus, op: Operation) -> None:
    if state.acc == 0:
        state.pc = to_address(op.operand)

# @intent:responsibility JN命令を実行し、ACCが符号付きで負なら分岐します。
def execute_jn(state: S12CpuState, bus: Bus, op: Operation) -> None:
    if state.signed_acc < 0:
        state.pc = to_address(op.operand)

# @intent:responsibility JMP命令を実行し、無条件に分岐します。
def execute_jmp(state: S12CpuState, bus: Bus, op: Operation) -> None:
    state.pc = to_address(op.operand)

# @intent:responsibility HALT命令を実行し、PCをHALT命令自身に戻します。
# @intent:rationale 停止フラグは持たない。呼び出し側はPCが進まないことでHALTを検出します。
def execute_halt(state: S12CpuState, bus: Bus, op: Operation) -> None:
    state.pc = to_address(state.pc - 1)

# @intent:responsibility 命令表に無いオペコードを実行します（何もしません）。
def execute_undefined(state: S12CpuState, bus: Bus, op: Operation) -> None:
    # Intentional: undefined opcodes are NOPs
    pass
