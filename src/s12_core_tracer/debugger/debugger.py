# s12_core_tracer/debugger/debugger.py
"""
デバッガモジュール。

S12 CPUのstep()を繰り返し呼び出して実行を制御し、HALT、サイクル上限、
またはユーザーが指定した条件（ブレークポイント）で実行を中断させる責務を負います。
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from s12_core_tracer.core.cpu import S12Cpu
from s12_core_tracer.core.instructions import Opcode
from s12_core_tracer.core.snapshot import Snapshot
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import BusAccessType

logger = logging.getLogger(__name__)

_HALT_PREFIX = format(Opcode.HALT.value, "04b")

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用 ("pc" / "acc")
    enabled: bool = True

# @intent:responsibility run()が停止した理由を定義します。
class StopReason(Enum):
    HALT = "HALT"
    CYCLE_LIMIT = "CYCLE_LIMIT"
    BREAKPOINT = "BREAKPOINT"

# @intent:data_structure run()の結果。
@dataclass(frozen=True)
class RunResult:
    cycles: int
    reason: StopReason
    snapshot: Optional[Snapshot] = None

# @intent:responsibility S12 CPUの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    CPU自体は停止フラグを持たないため、HALTの検出はここで行います。
    """
    def __init__(self, cpu: S12Cpu):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._halted: bool = False
        self._cycles: int = 0
        self._previous_state: S12CpuState = cpu.get_state().replace()
        self._last_snapshot: Optional[Snapshot] = None

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    @property
    def is_halted(self) -> bool:
        return self._halted

    def get_cycles(self) -> int:
        return self._cycles

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility CPUを1命令分実行し、その結果のSnapshotを返します。
    # @intent:rationale HALTは「ステップ前後でPCが同じ、かつ実行した命令の上位4bitがHALT」で判定します。
    def step_instruction(self) -> Snapshot:
        self._previous_state = self._cpu.get_state().replace()
        before_pc, _ = self._cpu.get_processor_state()
        encoding = self._cpu.step()
        after_pc, _ = self._cpu.get_processor_state()
        self._cycles += 1

        if before_pc == after_pc and encoding.startswith(_HALT_PREFIX):
            self._halted = True
            logger.info("HALT at PC=0x%s after %d cycles", format(int(after_pc, 2), "02X"), self._cycles)

        self._last_snapshot = self._cpu.get_last_snapshot()
        return self._last_snapshot

    # @intent:responsibility PC_MATCHブレークポイントが指定アドレスに設定されているか判定します。
    def _hit_pc_breakpoint(self, pc: int) -> bool:
        for bp in self._breakpoints:
            if bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc:
                return True
        return False

    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        current_state = snapshot.state

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name and hasattr(current_state, bp.register_name):
                    if getattr(current_state, bp.register_name) == bp.value:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                if bp.register_name and hasattr(current_state, bp.register_name):
                    if getattr(current_state, bp.register_name) != getattr(self._previous_state, bp.register_name):
                        return True
        return False

    # @intent:responsibility HALT、サイクル上限、ブレークポイントのいずれかまでCPUを実行します。
    # @intent:pre-condition max_cyclesを指定する場合は正の整数である必要があります。
    def run(self, max_cycles: Optional[int] = None) -> RunResult:
        """
        停止判定の優先順位は HALT -> サイクル上限 -> ブレークポイント です。
        開始地点のPCにあるPC_MATCHブレークポイントでは停止せず、まず1命令進めます。
        """
        if max_cycles is not None and max_cycles <= 0:
            raise ValueError(f"max_cycles must be a positive integer: {max_cycles}")

        self._halted = False
        start_cycles = self._cycles
        first = True

        while True:
            current_pc = self._cpu.get_state().pc
            if not first and self._hit_pc_breakpoint(current_pc):
                logger.info("Breakpoint hit at PC: 0x%02X", current_pc)
                return RunResult(self._cycles, StopReason.BREAKPOINT, self._last_snapshot)
            first = False

            snapshot = self.step_instruction()

            if self._halted:
                return RunResult(self._cycles, StopReason.HALT, snapshot)

            if max_cycles is not None and self._cycles - start_cycles >= max_cycles:
                logger.info("Cycle limit of %d reached", max_cycles)
                return RunResult(self._cycles, StopReason.CYCLE_LIMIT, snapshot)

            if self._check_other_breakpoints(snapshot):
                logger.info("Breakpoint hit at PC: 0x%02X", snapshot.state.pc)
                return RunResult(self._cycles, StopReason.BREAKPOINT, snapshot)

