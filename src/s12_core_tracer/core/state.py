# s12_core_tracer/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、S12のプロセッサ状態（PCとアキュムレータ）を保持するデータ構造を定義します。
"""
from dataclasses import dataclass, replace

from s12_core_tracer.common.types import ADDR_BITS, WORD_BITS, to_binary, to_signed

# @intent:responsibility S12のレジスタ状態を保持します。
# @intent:invariant pcは常に0..255、accは常に0..4095。代入側が必ずto_address/to_wordで縮小します。
@dataclass
class S12CpuState:
    """
    S12のレジスタ状態を保持するデータクラス。
    """
    pc: int = 0x00   # Program Counter (8bit)
    acc: int = 0x000 # Accumulator (12bit)

    # @intent:accessor アキュムレータを2の補数として解釈した値を返します。
    @property
    def signed_acc(self) -> int:
        return to_signed(self.acc)

    # @intent:responsibility 外部インターフェース向けの2進文字列表現 (PC, ACC) を返します。
    def as_binary(self):
        return to_binary(self.pc, ADDR_BITS), to_binary(self.acc, WORD_BITS)

    # @intent:responsibility dataclasses.replaceのラッパー。Snapshot用のコピー生成に使用します。
    def replace(self, **changes) -> 'S12CpuState':
        return replace(self, **changes)
