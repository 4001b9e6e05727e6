# s12_core_tracer/core/cpu.py
"""
Core Layer (S12 CPU)

このモジュールは、S12アキュムレータマシンの状態管理と命令サイクルの駆動を提供します。
具体的な命令の振る舞いはInstruction Layer (core.instructions) に移譲されます。

外部からの操作は全て戻り値で結果を返し、例外をこの境界の外へ送出しません。
"""
import logging
from typing import List, Optional, Tuple

from s12_core_tracer.common.types import DisassemblyLine, format_memory_lines, to_address, to_word
from s12_core_tracer.core import disassembler
from s12_core_tracer.core.instructions import decode_instruction, execute_instruction
from s12_core_tracer.core.snapshot import Metadata, Operation, Snapshot
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.loader.loader import MemFileLoader, MemFileWriter, MemImage
from s12_core_tracer.transport.bus import Bus

logger = logging.getLogger(__name__)

# @intent:responsibility S12の具体的なエミュレーションロジック（ロード、フェッチ、デコード、実行、出力）を提供します。
class S12Cpu:
    """
    S12アキュムレータマシン。
    メモリ、プロセッサ状態、トレースを排他的に所有します。スレッドセーフではありません。
    """
    # @intent:responsibility 全メモリ0、PC=0、ACC=0、空のトレースで初期化します。
    def __init__(self, bus: Optional[Bus] = None):
        self._bus = bus if bus is not None else Bus()
        self._state = S12CpuState()
        self._trace: List[str] = []
        self._cycle_count: int = 0
        self._last_snapshot: Optional[Snapshot] = None
        self._loader = MemFileLoader()
        self._writer = MemFileWriter()

    @property
    def bus(self) -> Bus:
        return self._bus

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> S12CpuState:
        return self._state

    # @intent:responsibility メモリ記述ファイルを読み込み、メモリと状態を初期化します。
    # @intent:post-condition 失敗時はFalseを返し、以前のメモリ・状態・トレースは変更されません。
    def load(self, file_path: str) -> bool:
        """
        ファイル全体を解析してから状態に適用します。
        解析に失敗した場合、部分的な適用は観測されません。
        """
        try:
            image = self._loader.load_mem_file(file_path)
        except (OSError, ValueError) as e:
            logger.error("Failed to initialize memory from %s: %s", file_path, e)
            return False

        self._apply_image(image)
        logger.info("Loaded %s (PC=0x%02X, ACC=0x%03X, %d cells)",
                    file_path, image.pc, image.acc, len(image.assignments))
        return True

    # @intent:responsibility 解析済みイメージをメモリと状態に適用します。
    def _apply_image(self, image: MemImage) -> None:
        memory = self._bus.get_memory()
        memory.clear()
        self._trace.clear()
        self._cycle_count = 0
        self._last_snapshot = None

        self._state.pc = to_address(image.pc)
        self._state.acc = to_word(image.acc)
        for address, word in image.assignments:
            self._bus.load(address, word)
        self._bus.get_and_clear_activity_log()

    # @intent:responsibility 現在のPCから命令ワードをフェッチし、PCを1進めます（255の次は0）。
    def _fetch(self) -> int:
        word = self._bus.read(self._state.pc)
        self._state.pc = to_address(self._state.pc + 1)
        return word

    def _decode(self, word: int) -> Operation:
        return decode_instruction(word)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus)
        self._state.acc = to_word(self._state.acc)

    # @intent:responsibility 1命令を実行し、実行した命令ワードの12bit 2進表現を返します。
    # @intent:flow フェッチ -> PC更新 -> デコード -> 実行 -> ACC縮小 -> トレース記録 -> スナップショット生成
    def step(self) -> str:
        """
        1命令サイクルだけ進めます。複数ステップを内部で実行することはありません。
        """
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        word = self._fetch()
        operation = self._decode(word)
        self._execute(operation)

        record = operation.trace_record
        self._trace.append(record)
        self._last_snapshot = self._create_snapshot(initial_pc, operation, record)
        logger.debug("%02X: %s -> PC=%02X ACC=%03X",
                     initial_pc, record, self._state.pc, self._state.acc)
        return operation.encoding

    # @intent:responsibility 実行結果からSnapshotオブジェクトを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation, record: str) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += 1
        return Snapshot(
            state=self._state.replace(), # 可変状態と共有しないようコピーする
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, initial_pc=initial_pc, trace_record=record),
            bus_activity=bus_activity,
        )

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def get_cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility (PCの8bit 2進, ACCの12bit 2進) を返します。副作用はありません。
    def get_processor_state(self) -> Tuple[str, str]:
        return self._state.as_binary()

    # @intent:responsibility 全256セルを "XX bbbbbbbbbbbb" の改行区切りで返します。副作用はありません。
    def get_memory_state(self) -> str:
        return "\n".join(format_memory_lines(self._bus.get_memory().dump()))

    # @intent:responsibility 実行済み命令のトレースのコピーを返します。
    def get_trace(self) -> List[str]:
        return list(self._trace)

    # @intent:responsibility ヘッダと256行のメモリをloadが読み戻せる形式で書き出します。
    def write_memory_snapshot(self, file_path: str) -> bool:
        lines = self._writer.format_snapshot(self._state.pc, self._state.acc, self._bus.get_memory().dump())
        try:
            self._writer.write_lines(file_path, lines)
        except OSError as e:
            logger.error("Failed to write memory snapshot %s: %s", file_path, e)
            return False
        return True

    # @intent:responsibility トレースを実行順に1行1レコードで書き出します。
    def write_trace(self, file_path: str) -> bool:
        try:
            self._writer.write_lines(file_path, self._writer.format_trace(self._trace))
        except OSError as e:
            logger.error("Failed to write trace %s: %s", file_path, e)
            return False
        return True

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
