import yaml
from typing import Dict, Any, Optional
from .models import RunConfig

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class ConfigLoader:
    def load_from_file(self, path: str) -> RunConfig:
        with open(path, 'r', encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> RunConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Run config must be a mapping, got {type(data).__name__}")

        max_cycles = self._parse_optional_int(data.get("max_cycles"))
        if max_cycles is not None and max_cycles <= 0:
            raise ValueError(f"max_cycles must be a positive integer: {max_cycles}")

        breakpoints = []
        for value in data.get("breakpoints", []) or []:
            address = self._parse_int(value)
            if not 0 <= address <= 0xFF:
                raise ValueError(f"Breakpoint address out of range: {value}")
            breakpoints.append(address)

        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {log_level}")

        output_base = data.get("output_base")
        return RunConfig(
            max_cycles=max_cycles,
            output_base=str(output_base) if output_base is not None else None,
            mem_out_suffix=str(data.get("mem_out_suffix", "_memOut")),
            trace_suffix=str(data.get("trace_suffix", "_trace")),
            breakpoints=breakpoints,
            log_level=log_level,
        )

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ValueError(f"Invalid integer format: {value}")

