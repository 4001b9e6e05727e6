"""
共通の型定義とワード/アドレスモデルを提供するモジュール。
S12の12bitワードと8bitアドレスの幅制約は、ここで定義する縮小関数を通してのみ適用します。
"""
import re
from typing import List, Tuple

# @intent:constant S12のメモリ空間とワード幅の定義。
MEM_SIZE = 256
WORD_BITS = 12
ADDR_BITS = 8
WORD_MASK = 0xFFF
ADDR_MASK = 0xFF
SIGN_BIT = 0x800

# @intent:data_structure 逆アセンブル結果の1行 (address, binary_word, mnemonic)。
DisassemblyLine = Tuple[int, str, str]

# @intent:utility_function 任意の整数を12bitワードに縮小します。
def to_word(value: int) -> int:
    return value & WORD_MASK

# @intent:utility_function 任意の整数を8bitアドレスに縮小します。255+1は0に、0-1は255に折り返します。
def to_address(value: int) -> int:
    return value & ADDR_MASK

# @intent:utility_function 12bitワードを2の補数として解釈した符号付き整数を返します。
# @intent:rationale 符号を見るのはJNの判定時のみで、格納値は常に符号なしのまま保持します。
def to_signed(word: int) -> int:
    word = to_word(word)
    return word - 0x1000 if word & SIGN_BIT else word

# @intent:utility_function 値の下位`bits`ビットを0埋めの2進文字列に変換します。
def to_binary(value: int, bits: int) -> str:
    return format(value & ((1 << bits) - 1), f"0{bits}b")

# @intent:utility_function ちょうど`bits`文字の'0'/'1'からなる文字列を整数に変換します。
# @intent:pre-condition 長さまたは文字種が不正な場合はValueErrorを送出します。
def parse_binary(token: str, bits: int) -> int:
    if token is None or not re.fullmatch(f"[01]{{{bits}}}", token):
        raise ValueError(f"Invalid {bits}-bit binary: {token!r}")
    return int(token, 2)

# @intent:utility_function 値の下位8bitを大文字2桁の16進文字列に変換します。
def hex2(value: int) -> str:
    return f"{value & ADDR_MASK:02X}"

# @intent:utility_function "XX bbbbbbbbbbbb" 形式のメモリ行を生成します。
def format_memory_lines(words: List[int]) -> List[str]:
    return [f"{hex2(addr)} {to_binary(word, WORD_BITS)}" for addr, word in enumerate(words)]
