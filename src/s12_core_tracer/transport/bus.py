# s12_core_tracer/transport/bus.py
"""
Transport Layer (メモリバス)

このモジュールは、S12の256ワードのメモリ空間を抽象化し、
読み書きアクセスを記録する責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List

from s12_core_tracer.common.types import MEM_SIZE, to_address, to_word

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 12bit value
    access_type: BusAccessType

# @intent:responsibility 固定長256ワードのメモリデバイスを提供します。
# @intent:invariant サイズは常にMEM_SIZEで、格納される値は常に12bitに縮小されています。
class WordMemory:
    """
    S12のメインメモリ。サイズ変更はできません。
    """
    def __init__(self):
        self._memory: List[int] = [0] * MEM_SIZE

    # @intent:responsibility 指定されたアドレスから12bitワードを読み出します。
    # @intent:rationale S12のアドレス空間は8bitで折り返すため、範囲外は例外ではなく縮小して扱います。
    def read(self, address: int) -> int:
        return self._memory[to_address(address)]

    # @intent:responsibility 指定されたアドレスに12bitワードを書き込みます。
    def write(self, address: int, data: int) -> None:
        self._memory[to_address(address)] = to_word(data)

    # @intent:responsibility 全セルを0に戻します。
    def clear(self) -> None:
        for i in range(MEM_SIZE):
            self._memory[i] = 0

    # @intent:responsibility 全セルの内容をアドレス昇順のリストとして返します（コピー）。
    def dump(self) -> List[int]:
        return list(self._memory)

    def get_size(self) -> int:
        return len(self._memory)

# @intent:responsibility メモリへのアクセスを仲介し、その全てを記録する共通バス。
# @intent:rationale バスの全てのアクセスを記録し、Snapshotに含めることで実行の観測可能性を高めます。
class Bus:
    """
    WordMemoryへのアクセスを仲介するバス。
    read/writeは記録され、peek/loadは記録されません。
    """
    def __init__(self, memory: WordMemory = None):
        self._memory = memory if memory is not None else WordMemory()
        self._bus_activity_log: List[BusAccess] = []

    # @intent:responsibility バスアクセスをログに記録します。
    def _log_access(self, address: int, data: int, access_type: BusAccessType) -> None:
        self._bus_activity_log.append(BusAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    def get_memory(self) -> WordMemory:
        return self._memory

    def read(self, address: int) -> int:
        """
        指定されたアドレスから12bitワードを読み出します。
        アクセスはログに記録されます。
        """
        address = to_address(address)
        data = self._memory.read(address)
        self._log_access(address, data, BusAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        逆アセンブラやCLIの--listing表示などのインスペクタ用。
        """
        return self._memory.read(address)

    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに12bitワードを書き込みます。
        アクセスはログに記録されます。
        """
        address = to_address(address)
        data = to_word(data)
        self._memory.write(address, data)
        self._log_access(address, data, BusAccessType.WRITE)

    # @intent:responsibility ローダー専用の書き込み口。ログには残りません。
    def load(self, address: int, data: int) -> None:
        self._memory.write(address, data)
