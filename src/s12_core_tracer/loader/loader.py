# s12_core_tracer/loader/loader.py
"""
メモリ記述ファイル（.mem）のローダー/ライターモジュール。

形式:
    <8bit PC 2進> <12bit ACC 2進>        # ヘッダ。最初の非空・非コメント行
    <2桁16進アドレス> <12bit ワード 2進>  # 0行以上、順不同、重複は後勝ち
'#' から行末まではコメントとして除去されます。
"""
import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from s12_core_tracer.common.types import (
    ADDR_BITS, WORD_BITS, format_memory_lines, parse_binary, to_address, to_binary,
)

_HEX_TOKEN = re.compile(r"[0-9A-Fa-f]+")

# @intent:responsibility メモリ記述ファイルの解析エラーを表します。行番号を保持します。
class MemFileError(ValueError):
    def __init__(self, message: str, line_num: int = 0):
        if line_num:
            message = f"line {line_num}: {message}"
        super().__init__(message)
        self.line_num = line_num

# @intent:data_structure 解析済みのメモリイメージ。CPUへの適用前に完全に構築されます。
@dataclass(frozen=True)
class MemImage:
    pc: int
    acc: int
    assignments: Tuple[Tuple[int, int], ...] = () # (address, word) をファイル順に保持

# @intent:utility_function 行コメント（'#'以降）を除去します。
def strip_comment(line: str) -> str:
    index = line.find('#')
    return line[:index] if index >= 0 else line

# @intent:responsibility メモリ記述ファイルを解析してMemImageを生成するローダー。
class MemFileLoader:
    """
    .mem形式のテキストを解析するローダー。
    解析はバスやCPUに一切触れず、失敗時はMemFileErrorを送出します。
    """
    def load_mem_file(self, file_path: str) -> MemImage:
        with open(file_path, 'r', encoding="utf-8") as f:
            return self.parse_lines(f)

    def parse_lines(self, lines: Iterable[str]) -> MemImage:
        header = None
        assignments: List[Tuple[int, int]] = []

        for line_num, line in enumerate(lines, 1):
            tokens = strip_comment(line).split()
            if not tokens:
                continue

            if header is None:
                # ヘッダ行は PC と ACC の2トークンが必須
                if len(tokens) < 2:
                    raise MemFileError("Header requires PC and ACC binary", line_num)
                header = (
                    self._parse_binary(tokens[0], ADDR_BITS, line_num),
                    self._parse_binary(tokens[1], WORD_BITS, line_num),
                )
                continue

            if len(tokens) < 2:
                # 不完全なメモリ行は黙って読み飛ばす
                continue
            address = self._parse_address(tokens[0], line_num)
            word = self._parse_binary(tokens[1], WORD_BITS, line_num)
            assignments.append((address, word))

        if header is None:
            raise MemFileError("Missing header line (PC and ACC)")

        return MemImage(pc=header[0], acc=header[1], assignments=tuple(assignments))

    def _parse_binary(self, token: str, bits: int, line_num: int) -> int:
        try:
            return parse_binary(token, bits)
        except ValueError as e:
            raise MemFileError(str(e), line_num) from e

    def _parse_address(self, token: str, line_num: int) -> int:
        if not _HEX_TOKEN.fullmatch(token):
            raise MemFileError(f"Invalid hex address: {token!r}", line_num)
        return to_address(int(token, 16))

# @intent:responsibility メモリスナップショットとトレースをテキストとして書き出すライター。
class MemFileWriter:
    """
    出力はMemFileLoaderがそのまま読み戻せる形式です。
    """
    def format_snapshot(self, pc: int, acc: int, words: List[int]) -> List[str]:
        header = f"{to_binary(pc, ADDR_BITS)} {to_binary(acc, WORD_BITS)}"
        return [header] + format_memory_lines(words)

    def format_trace(self, records: Iterable[str]) -> List[str]:
        return list(records)

    # @intent:pre-condition 書き込みに失敗した場合はOSErrorをそのまま送出します。
    def write_lines(self, file_path: str, lines: Iterable[str]) -> None:
        with open(file_path, 'w', encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
