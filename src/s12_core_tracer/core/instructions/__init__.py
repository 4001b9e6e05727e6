# s12_core_tracer/core/instructions/__init__.py
"""
S12命令セット実装パッケージ。
"""
from s12_core_tracer.core.snapshot import Operation
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import Bus
from .base import Opcode, decode_instruction
from .control import execute_undefined
from .maps import EXECUTE_MAP

# @intent:responsibility デコードされたS12命令を実行します。
def execute_instruction(operation: Operation, state: S12CpuState, bus: Bus) -> None:
    """
    命令表に無いオペコードは execute_undefined に振り分けられ、状態を変更しません。
    """
    if operation.defined:
        executor = EXECUTE_MAP[Opcode(operation.opcode)]
    else:
        executor = execute_undefined
    executor(state, bus, operation)
