from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class RunConfig:
    max_cycles: Optional[int] = None
    output_base: Optional[str] = None
    mem_out_suffix: str = "_memOut"
    trace_suffix: str = "_trace"
    breakpoints: List[int] = field(default_factory=list) # PC_MATCHとして登録するアドレス
    log_level: str = "WARNING"
