# tests/transport/test_word_bus.py
"""
s12_core_tracer.transport.busモジュールの単体テスト。
"""
from s12_core_tracer.transport.bus import Bus, BusAccessType, WordMemory

# @intent:test_suite 256ワードメモリとバスアクセス記録の検証。

class TestWordMemory:
    # @intent:test_case_init メモリが256ワード、全て0で初期化されることを検証します。
    def test_init(self):
        memory = WordMemory()
        assert memory.get_size() == 256
        assert all(word == 0 for word in memory.dump())

    def test_write_narrows_address_and_word(self):
        memory = WordMemory()
        memory.write(0x100, 0x1ABC) # アドレス0x00、ワード0xABCに縮小される
        assert memory.read(0x00) == 0xABC
        assert memory.get_size() == 256

    def test_clear(self):
        memory = WordMemory()
        memory.write(0x10, 0x123)
        memory.clear()
        assert memory.read(0x10) == 0
        assert memory.get_size() == 256

    def test_dump_is_a_copy(self):
        memory = WordMemory()
        dump = memory.dump()
        dump[0] = 0xFFF
        assert memory.read(0) == 0

class TestBus:
    # @intent:test_case_logging read/writeがログに記録され、peek/loadは記録されないことを検証します。
    def test_activity_log(self):
        bus = Bus()
        bus.write(0x20, 0x0AB)
        assert bus.read(0x20) == 0x0AB
        bus.peek(0x20)
        bus.load(0x21, 0x001)

        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x20, 0x0AB, BusAccessType.WRITE),
            (0x20, 0x0AB, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []
        assert bus.peek(0x21) == 0x001

    def test_write_logs_narrowed_value(self):
        bus = Bus()
        bus.write(0x1FF, 0x1001)
        log = bus.get_and_clear_activity_log()
        assert log[0].address == 0xFF
        assert log[0].data == 0x001

    def test_shared_memory(self):
        memory = WordMemory()
        bus = Bus(memory)
        bus.write(0x05, 0x555)
        assert bus.get_memory() is memory
        assert memory.read(0x05) == 0x555
