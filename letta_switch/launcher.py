"""Run the external ``letta`` executable for an agent."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Optional

from letta_switch.constants import LETTA_EXECUTABLE
from letta_switch.errors import LaunchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchRequest:
    agent_id: str
    model: Optional[str] = None
    memory_blocks: list[str] = field(default_factory=list)
    init_blocks: Optional[list[str]] = None
    base_tools: Optional[list[str]] = None


def build_command(request: LaunchRequest, executable: str = LETTA_EXECUTABLE) -> list[str]:
    # letta has no memory block flag; memory_blocks is recorded on saved profiles only.
    args = [executable, "--agent", request.agent_id]
    if request.model:
        args.extend(["--model", request.model])
    if request.init_blocks:
        args.extend(["--init-blocks", ",".join(request.init_blocks)])
    if request.base_tools:
        args.extend(["--base-tools", ",".join(request.base_tools)])
    return args


class Launcher:
    def __init__(self, executable: str = LETTA_EXECUTABLE) -> None:
        self.executable = executable

    def run(self, request: LaunchRequest) -> int:
        command = build_command(request, self.executable)
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(command, check=False)
        except FileNotFoundError as exc:
            raise LaunchError(
                f"Failed to launch {self.executable}: executable not found"
            ) from exc
        except OSError as exc:
            raise LaunchError(f"Failed to launch {self.executable}: {exc}") from exc
        if completed.returncode != 0:
            logger.error("%s exited with code %d", self.executable, completed.returncode)
        return completed.returncode
