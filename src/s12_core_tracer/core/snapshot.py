# s12_core_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1ステップ分の命令とその実行結果を記録した不変のデータ構造を定義します。
トレース出力とデバッガのブレークポイント判定に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from s12_core_tracer.common.types import hex2
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import BusAccess

# @intent:responsibility デコードされた1命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    フェッチした命令ワードをデコードした結果。
    """
    word: int # 例: 0x410
    opcode: int # 上位4bit 例: 0x4
    operand: int # 下位8bit 例: 0x10
    mnemonic: str # 例: "LOAD", 未定義なら "OP1"
    encoding: str # 12bitの2進表現 例: "010000010000"
    defined: bool = True # 命令表に存在するオペコードかどうか

    # @intent:responsibility トレースに記録する "MNEMONIC XX" 形式の文字列を返します。
    @property
    def trace_record(self) -> str:
        return f"{self.mnemonic} {hex2(self.operand)}"

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    cycle_count: int
    initial_pc: int = 0
    trace_record: Optional[str] = None # 例: "JZ 0A"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1ステップ実行直後のCPU状態、実行した命令、バスアクセスを記録した不変のデータ構造。
    """
    state: S12CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:rationale stateはSnapshot生成時にコピーを渡すこと。CPU側の可変状態と共有しないため。
