# src/s12_core_tracer/__init__.py
"""
S12 Core Tracer

12bitアキュムレータマシン S12 の命令レベルシミュレータ。
"""
from s12_core_tracer.core.cpu import S12Cpu
