# veshader/compiler/glslc.py
from __future__ import annotations

import dataclasses
import logging
import os
import re
import subprocess
from pathlib import Path
from shutil import which
from typing import List, Optional

from veshader.compiler.settings import CompileSettings
from veshader.compiler.spirv import read_header
from veshader.errors import CompilerNotFound
from veshader.parsing.serialize import SYNTHETIC_HEADER_LINES
from veshader.types import CompilerOutput, RawDiagnostic, StageKind

logger = logging.getLogger(__name__)

_LOCATED = re.compile(
    r"^(?P<file>.*?):(?P<line>\d+):(?:(?P<column>\d+):)?\s*"
    r"(?P<severity>fatal error|error|warning):\s*(?P<message>.*)$"
)
_UNLOCATED = re.compile(
    r"^(?P<prefix>[^:]*):\s*(?P<severity>fatal error|error|warning):\s*(?P<message>.*)$"
)
_SUMMARY = re.compile(r"^\d+ (?:errors?|warnings?)(?: and \d+ (?:errors?|warnings?))? generated\.$")
# Names glslc gives the unit read from stdin; anything else is an #included file.
_STDIN_NAMES = frozenset({"<stdin>", "", "-"})


def find_glslc(explicit: Optional[str] = None) -> str:
    """
    Locate the glslc executable.

    Lookup order: explicit path, $GLSLC, $VULKAN_SDK/bin, PATH.
    """
    if explicit:
        return explicit

    env_glslc = os.environ.get("GLSLC")
    if env_glslc:
        return env_glslc

    vulkan_sdk = os.environ.get("VULKAN_SDK")
    if vulkan_sdk:
        sdk = Path(vulkan_sdk)
        for c in (
            sdk / "bin" / "glslc",
            sdk / "Bin" / "glslc",
            sdk / "bin" / "glslc.exe",
            sdk / "Bin" / "glslc.exe",
        ):
            if c.exists():
                return str(c)

    for name in ("glslc", "glslc.exe"):
        p = which(name)
        if p:
            return p

    raise CompilerNotFound(
        "glslc not found. Install the Vulkan SDK and put glslc on PATH, "
        "or set GLSLC / VULKAN_SDK, or pass --glslc."
    )


def _stage_local(physical: int) -> int:
    return physical - SYNTHETIC_HEADER_LINES


def _severity(text: str) -> str:
    return "warning" if text == "warning" else "error"


def parse_glslc_output(stderr: str) -> List[RawDiagnostic]:
    """
    Turn glslc's stderr into diagnostics with stage-local line numbers.

    Lines reported against an #included file keep that file's own numbering.
    """
    diagnostics: List[RawDiagnostic] = []
    for line in stderr.splitlines():
        line = line.strip()
        if not line or _SUMMARY.match(line):
            continue

        m = _LOCATED.match(line)
        if m:
            column = m.group("column")
            file = m.group("file")
            physical = int(m.group("line"))
            included = file not in _STDIN_NAMES
            diagnostics.append(
                RawDiagnostic(
                    line=physical if included else _stage_local(physical),
                    column=int(column) if column is not None else None,
                    message=m.group("message").strip(),
                    severity=_severity(m.group("severity")),
                    file=file if included else None,
                )
            )
            continue

        m = _UNLOCATED.match(line)
        if m:
            diagnostics.append(
                RawDiagnostic(
                    line=None,
                    column=None,
                    message=m.group("message").strip(),
                    severity=_severity(m.group("severity")),
                )
            )
            continue

        # Context lines glslc prints under a diagnostic; keep them attached.
        if diagnostics:
            last = diagnostics[-1]
            diagnostics[-1] = dataclasses.replace(last, message=f"{last.message}\n  {line}")
        else:
            diagnostics.append(RawDiagnostic(line=None, column=None, message=line))
    return diagnostics


class GlslcCompiler:
    """
    Compile capability backed by the `glslc` command line compiler.

    Callable as `compiler(source_text, stage_kind)`; the source is fed on
    stdin and the SPIR-V module read back from stdout.
    """

    def __init__(self, settings: CompileSettings, executable: Optional[str] = None) -> None:
        self.settings = settings
        self.executable = executable or find_glslc(settings.glslc)

    def with_include_dir(self, directory: Path) -> GlslcCompiler:
        """Copy of this compiler that also resolves #include against `directory`."""
        settings = dataclasses.replace(
            self.settings,
            include_dirs=(*self.settings.include_dirs, str(directory)),
        )
        return GlslcCompiler(settings, executable=self.executable)

    def command(self, stage_kind: StageKind) -> List[str]:
        s = self.settings
        cmd = [
            self.executable,
            f"-fshader-stage={stage_kind.glslc_stage}",
            f"--target-env={s.target_version.value}",
            s.optimization.glslc_flag,
        ]
        if s.debug_info:
            cmd.append("-g")
        if s.forced_version is not None:
            cmd.append(f"-std={s.forced_version}")
        for include_dir in s.include_dirs:
            cmd += ["-I", include_dir]
        cmd += ["-o", "-", "-"]
        return cmd

    def __call__(self, source_text: str, stage_kind: StageKind) -> CompilerOutput:
        cmd = self.command(stage_kind)
        logger.debug("running %s", subprocess.list2cmdline(cmd))

        try:
            proc = subprocess.run(
                cmd,
                input=source_text.encode("utf-8"),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            return CompilerOutput(
                binary=None,
                diagnostics=(RawDiagnostic(None, None, f"failed to run glslc: {e}"),),
            )

        stderr = proc.stderr.decode("utf-8", errors="replace")
        diagnostics = parse_glslc_output(stderr)

        if proc.returncode != 0:
            if not any(d.severity == "error" for d in diagnostics):
                diagnostics.append(
                    RawDiagnostic(None, None, f"glslc exited with status {proc.returncode}")
                )
            return CompilerOutput(binary=None, diagnostics=tuple(diagnostics))

        try:
            header = read_header(proc.stdout)
        except ValueError as e:
            diagnostics.append(RawDiagnostic(None, None, f"glslc produced invalid SPIR-V: {e}"))
            return CompilerOutput(binary=None, diagnostics=tuple(diagnostics))

        logger.debug(
            "%s: SPIR-V %d.%d, %d words",
            stage_kind.value,
            header.version_major,
            header.version_minor,
            header.word_count,
        )
        return CompilerOutput(binary=proc.stdout, diagnostics=tuple(diagnostics))
