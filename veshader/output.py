# veshader/output.py
from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import List, Sequence

from veshader.types import CompiledArtifact

logger = logging.getLogger(__name__)


def artifact_names(stem: str, artifacts: Sequence[CompiledArtifact]) -> List[str]:
    """
    File names for each artifact, in order.

    `<stem>-<suffix>.spv`; a stage kind seen again gets `-<n>` appended so
    repeated blocks never overwrite each other.
    """
    seen: Counter = Counter()
    names = []
    for artifact in artifacts:
        suffix = artifact.stage_kind.file_suffix
        n = seen[suffix]
        seen[suffix] += 1
        if n == 0:
            names.append(f"{stem}-{suffix}.spv")
        else:
            names.append(f"{stem}-{suffix}-{n}.spv")
    return names


def write_artifacts(
    source_path: Path, artifacts: Sequence[CompiledArtifact], output_dir: Path
) -> List[Path]:
    """Write every successfully compiled stage. Returns the written paths."""
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for artifact, name in zip(artifacts, artifact_names(source_path.stem, artifacts)):
        if not artifact.ok:
            continue
        target = output_dir / name
        target.write_bytes(artifact.binary)
        logger.info("wrote %s", target)
        written.append(target)
    return written
