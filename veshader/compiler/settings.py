# veshader/compiler/settings.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from veshader.errors import SettingsError


class TargetVersion(str, Enum):
    """Vulkan environment the SPIR-V is generated for."""

    VULKAN1_0 = "vulkan1.0"
    VULKAN1_1 = "vulkan1.1"
    VULKAN1_2 = "vulkan1.2"

    @classmethod
    def parse(cls, text: str) -> TargetVersion:
        """Accept CLI spellings (`vulkan1_1`) as well as glslc values (`vulkan1.1`)."""
        if isinstance(text, cls):
            return text
        key = text.strip().lower()
        if key in _TARGET_ALIASES:
            return _TARGET_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise SettingsError(f"Invalid target: {text}") from None


_TARGET_ALIASES = {
    "vulkan": TargetVersion.VULKAN1_0,
    "vulkan1_0": TargetVersion.VULKAN1_0,
    "vulkan1_1": TargetVersion.VULKAN1_1,
    "vulkan1_2": TargetVersion.VULKAN1_2,
}


class OptimizationLevel(str, Enum):
    ZERO = "zero"
    SIZE = "size"
    PERFORMANCE = "performance"

    @classmethod
    def parse(cls, text: str) -> OptimizationLevel:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise SettingsError(f"Failed to parse optimization level: {text}") from None

    @property
    def glslc_flag(self) -> str:
        return {"zero": "-O0", "size": "-Os", "performance": "-O"}[self.value]


@dataclass(frozen=True, slots=True)
class CompileSettings:
    """Options forwarded to the external shader compiler."""

    target_version: TargetVersion = TargetVersion.VULKAN1_0
    optimization: OptimizationLevel = OptimizationLevel.PERFORMANCE
    debug_info: bool = False
    forced_version: Optional[int] = None  # glslc -std, overrides #version
    glslc: Optional[str] = None  # Explicit path; otherwise auto-detected.
    include_dirs: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RunSettings:
    """Per-invocation options that are not compiler flags."""

    output_dir: Path
    ignore_extension: bool = False
    jobs: int = 4
