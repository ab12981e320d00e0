import pytest

from veshader.compiler.settings import CompileSettings, OptimizationLevel, TargetVersion
from veshader.errors import SettingsError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("vulkan", TargetVersion.VULKAN1_0),
        ("vulkan1_0", TargetVersion.VULKAN1_0),
        ("vulkan1_1", TargetVersion.VULKAN1_1),
        ("VULKAN1_2", TargetVersion.VULKAN1_2),
    ],
)
def test_target_version_parse(text, expected):
    assert TargetVersion.parse(text) is expected


def test_target_version_invalid():
    with pytest.raises(SettingsError, match="Invalid target"):
        TargetVersion.parse("opengl")


def test_target_version_accepts_glslc_values():
    assert TargetVersion.parse("vulkan1.2") is TargetVersion.VULKAN1_2
    assert TargetVersion.parse(TargetVersion.VULKAN1_1) is TargetVersion.VULKAN1_1


def test_optimization_flags():
    assert OptimizationLevel.parse("zero").glslc_flag == "-O0"
    assert OptimizationLevel.parse("size").glslc_flag == "-Os"
    assert OptimizationLevel.parse("Performance").glslc_flag == "-O"


def test_optimization_invalid():
    with pytest.raises(SettingsError):
        OptimizationLevel.parse("fast")


def test_defaults():
    s = CompileSettings()
    assert s.target_version is TargetVersion.VULKAN1_0
    assert s.optimization is OptimizationLevel.PERFORMANCE
    assert not s.debug_info
    assert s.forced_version is None
