# stormfetch/models/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple


class RenderContext(BaseModel):
    """Everything the banner renderer needs, built once per run."""
    model_config = ConfigDict(frozen=True)

    colors: Tuple[int, ...] = ()
    force_config_palette: bool = False
    template: str = "auto"


class ExpandedArt(BaseModel):
    lines: List[str] = Field(default_factory=list)
    plain_lines: List[str] = Field(default_factory=list)
    # Slot ids (C0..C6) emitted on each line, in order of appearance
    slots: List[List[str]] = Field(default_factory=list)
    colors: Tuple[int, ...] = ()


class DistroInfo(BaseModel):
    id: str = "unknown"
    long_name: str = "Unknown"
    short_name: str = "Unknown"


class MemoryInfo(BaseModel):
    # MiB
    total: int
    free: int
    available: int

    @property
    def used(self) -> int:
        return self.total - self.available


class Partition(BaseModel):
    device: str
    mount_point: str
    label: str = ""
    fs_type: str = ""
    total_size: int = 0
    used_size: int = 0
    free_size: int = 0


class CommandResult(BaseModel):
    stdout: str
    stderr: str
    exit_code: int

    @property
    def output_block(self) -> List[str]:
        # One fact per line; the final newline does not start another row
        stdout = self.stdout[:-1] if self.stdout.endswith("\n") else self.stdout
        return stdout.split("\n")


class ProbeTiming(BaseModel):
    key: str
    milliseconds: int
    error: Optional[str] = None
