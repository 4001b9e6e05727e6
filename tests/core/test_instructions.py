# tests/core/test_instructions.py
"""
s12_core_tracer.core.instructionsパッケージの単体テスト。
デコードと各命令の実行を、CPUのステップを介さずに検証します。
"""
import pytest

from s12_core_tracer.core.instructions import Opcode, decode_instruction, execute_instruction
from s12_core_tracer.core.instructions.maps import EXECUTE_MAP
from s12_core_tracer.core.state import S12CpuState
from s12_core_tracer.transport.bus import Bus

# @intent:test_suite 命令のデコードとオペコード毎の意味論の検証。

class TestDecode:
    def test_decode_fields(self):
        op = decode_instruction(0x4A5)
        assert op.opcode == 0x4
        assert op.operand == 0xA5
        assert op.mnemonic == "LOAD"
        assert op.encoding == "010010100101"
        assert op.defined is True
        assert op.trace_record == "LOAD A5"

    @pytest.mark.parametrize("word, mnemonic", [
        (0x200, "SUB"), (0x300, "ADD"), (0x400, "LOAD"), (0x500, "STORE"),
        (0x600, "LOADI"), (0x700, "STOREI"), (0x800, "JZ"), (0x900, "JN"),
        (0xA00, "JMP"), (0xF00, "HALT"),
    ])
    def test_defined_mnemonics(self, word, mnemonic):
        assert decode_instruction(word).mnemonic == mnemonic

    # @intent:test_case_undefined 未定義オペコードが汎用ニーモニックで表現されることを検証します。
    @pytest.mark.parametrize("word, mnemonic", [
        (0x000, "OP0"), (0x1FF, "OP1"), (0xB07, "OPB"), (0xC00, "OPC"), (0xE42, "OPE"),
    ])
    def test_undefined_mnemonics(self, word, mnemonic):
        op = decode_instruction(word)
        assert op.mnemonic == mnemonic
        assert op.defined is False

    def test_trace_record_pads_operand(self):
        assert decode_instruction(0x805).trace_record == "JZ 05"

    def test_execute_map_covers_every_opcode(self):
        assert set(EXECUTE_MAP) == set(Opcode)

class TestExecute:
    @pytest.fixture
    def setup(self):
        bus = Bus()
        # PCは既に次の命令を指している想定
        state = S12CpuState(pc=0x11, acc=0)
        return state, bus

    def _run(self, state, bus, word):
        execute_instruction(decode_instruction(word), state, bus)

    def test_load(self, setup):
        state, bus = setup
        bus.load(0x30, 0x123)
        self._run(state, bus, 0x430)
        assert state.acc == 0x123

    def test_store(self, setup):
        state, bus = setup
        state.acc = 0xABC
        self._run(state, bus, 0x540)
        assert bus.peek(0x40) == 0xABC

    # @intent:test_case_indirect LOADIがオペランドのセルをポインタとして扱うことを検証します。
    def test_loadi(self, setup):
        state, bus = setup
        bus.load(0x10, 0x020)
        bus.load(0x20, 0x0AB)
        self._run(state, bus, 0x610)
        assert state.acc == 0x0AB

    def test_loadi_uses_low_byte_of_pointer(self, setup):
        state, bus = setup
        bus.load(0x10, 0xF20) # 上位4bitは無視される
        bus.load(0x20, 0x777)
        self._run(state, bus, 0x610)
        assert state.acc == 0x777

    def test_storei(self, setup):
        state, bus = setup
        state.acc = 0x456
        bus.load(0x10, 0x030)
        self._run(state, bus, 0x710)
        assert bus.peek(0x30) == 0x456
        assert bus.peek(0x10) == 0x030

    def test_add_wraps(self, setup):
        state, bus = setup
        state.acc = 0xFFF
        bus.load(0x50, 0x002)
        self._run(state, bus, 0x350)
        assert state.acc == 0x001

    def test_sub_wraps(self, setup):
        state, bus = setup
        state.acc = 0x001
        bus.load(0x50, 0x002)
        self._run(state, bus, 0x250)
        assert state.acc == 0xFFF

    def test_jz_taken(self, setup):
        state, bus = setup
        self._run(state, bus, 0x80A)
        assert state.pc == 0x0A

    def test_jz_not_taken(self, setup):
        state, bus = setup
        state.acc = 0x001
        self._run(state, bus, 0x80A)
        assert state.pc == 0x11

    def test_jn_taken(self, setup):
        state, bus = setup
        state.acc = 0x800
        self._run(state, bus, 0x905)
        assert state.pc == 0x05

    def test_jn_not_taken_for_positive(self, setup):
        state, bus = setup
        state.acc = 0x7FF
        self._run(state, bus, 0x905)
        assert state.pc == 0x11

    def test_jn_not_taken_for_zero(self, setup):
        state, bus = setup
        self._run(state, bus, 0x905)
        assert state.pc == 0x11

    def test_jmp(self, setup):
        state, bus = setup
        self._run(state, bus, 0xAFE)
        assert state.pc == 0xFE

    def test_halt_backs_up_pc(self, setup):
        state, bus = setup
        self._run(state, bus, 0xF00)
        assert state.pc == 0x10

    def test_halt_wraps_below_zero(self, setup):
        state, bus = setup
        state.pc = 0x00
        self._run(state, bus, 0xF00)
        assert state.pc == 0xFF

    # @intent:test_case_undefined 未定義命令が状態もメモリも変更しないことを検証します。
    def test_undefined_is_noop(self, setup):
        state, bus = setup
        state.acc = 0x321
        before = bus.get_memory().dump()
        self._run(state, bus, 0xC42)
        assert state.pc == 0x11
        assert state.acc == 0x321
        assert bus.get_memory().dump() == before
