# s12_core_tracer/cli.py
"""
コマンドラインのエントリポイント。

.memファイルを読み込み、HALTまたはサイクル上限までS12を実行し、
<base>_memOut と <base>_trace を書き出して概要をコンソールに表示します。
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from s12_core_tracer.config.loader import ConfigLoader
from s12_core_tracer.config.models import RunConfig
from s12_core_tracer.core.cpu import S12Cpu
from s12_core_tracer.core.disassembler import disassemble_nonzero
from s12_core_tracer.debugger.debugger import BreakpointCondition, BreakpointConditionType, Debugger

logger = logging.getLogger(__name__)

# @intent:utility_function 入力ファイル名からディレクトリと拡張子を除いた出力ベース名を導出します。
def derive_base(path: str) -> str:
    name = os.path.basename(path)
    root, _ = os.path.splitext(name)
    return root

# @intent:utility_function "0x"の有無に関わらず16進のアドレスを解釈します（argparse用）。
def parse_address(text: str) -> int:
    try:
        value = int(text, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hex address: {text!r}")
    if not 0 <= value <= 0xFF:
        raise argparse.ArgumentTypeError(f"address out of range: {text!r}")
    return value

def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"-c needs an integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"-c needs a positive integer: {text!r}")
    return value

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="s12-sim", description="S12 accumulator machine simulator")
    parser.add_argument("mem_file", help="memory/state description file")
    parser.add_argument("-o", "--output-base", dest="output_base", help="base name for _memOut and _trace files")
    parser.add_argument("-c", "--cycles", dest="max_cycles", type=positive_int, help="maximum number of cycles to run")
    parser.add_argument("--config", help="YAML run configuration")
    parser.add_argument("-b", "--break", dest="breakpoints", type=parse_address, action="append", default=[],
                        help="stop when PC reaches this hex address (repeatable)")
    parser.add_argument("--listing", action="store_true", help="print a disassembly of the loaded memory")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every executed instruction")
    return parser

# @intent:responsibility コマンドライン引数で設定ファイルの値を上書きした実行設定を生成します。
def resolve_config(args: argparse.Namespace) -> RunConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else RunConfig()
    if args.output_base:
        config.output_base = args.output_base
    if args.max_cycles is not None:
        config.max_cycles = args.max_cycles
    for address in args.breakpoints:
        if address not in config.breakpoints:
            config.breakpoints.append(address)
    if args.verbose:
        config.log_level = "DEBUG"
    return config

# @intent:responsibility シミュレータを実行し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    """
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as e:
        print(f"Invalid run configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, config.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    base = config.output_base or derive_base(args.mem_file)
    mem_out = base + config.mem_out_suffix
    trace_out = base + config.trace_suffix

    cpu = S12Cpu()
    # 読み込み・書き出しの失敗はS12Cpu側でERRORログとして報告されます。
    if not cpu.load(args.mem_file):
        return 1

    if args.listing:
        for addr, encoding, mnemonic in disassemble_nonzero(cpu.bus):
            print(f"{addr:02X}  {encoding}  {mnemonic}")

    debugger = Debugger(cpu)
    for address in config.breakpoints:
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=address))
    result = debugger.run(config.max_cycles)
    logger.info("Run stopped: %s", result.reason.value)

    status = 0
    if not cpu.write_memory_snapshot(mem_out):
        status = 1
    if not cpu.write_trace(trace_out):
        status = 1

    state = cpu.get_state()
    print(f"Cycles Executed: {result.cycles}")
    print(f"PC: 0x{state.pc:02X}")
    print(f"ACC: 0x{state.acc:03X}")
    return status

if __name__ == '__main__':
    sys.exit(main())
