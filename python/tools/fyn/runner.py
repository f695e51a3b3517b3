#!/usr/bin/env python3
"""
Synchronous execution of external commands (pacman, git, makepkg).
"""

import os
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from .models import CommandResult


class ProcessRunner:
    """
    Runs external commands and waits for them to finish.

    In capture mode stdout/stderr are collected and returned; in stream mode
    the child writes straight to the terminal, which is what long-running,
    interactive tools like makepkg need.
    """

    def __init__(self, use_sudo: bool = True):
        self.use_sudo = use_sudo

    def _needs_sudo(self) -> bool:
        return self.use_sudo and hasattr(os, "geteuid") and os.geteuid() != 0

    def run(
        self,
        command: List[str],
        cwd: Optional[Union[str, Path]] = None,
        capture_output: bool = True,
        privileged: bool = False,
    ) -> CommandResult:
        """
        Execute a command and return its result.

        Args:
            command: The command to execute as a list of strings
            cwd: Working directory for the child process
            capture_output: Capture stdout/stderr instead of streaming them
            privileged: Prefix the command with sudo (unless already root)

        Returns:
            CommandResult. A command that cannot be started is reported with
            return code -1 and the error text rather than raised.
        """
        final_command = list(command)
        if privileged and final_command[0] != "sudo" and self._needs_sudo():
            final_command.insert(0, "sudo")

        cmd_str = " ".join(final_command)
        logger.debug(f"Executing command: {cmd_str} in {cwd or 'current directory'}")

        try:
            process = subprocess.run(
                final_command,
                cwd=str(cwd) if cwd is not None else None,
                check=False,
                text=True,
                errors="replace",
                capture_output=capture_output,
            )
        except OSError as e:
            logger.error(f"Exception executing command {cmd_str}: {e}")
            return CommandResult(command=final_command, return_code=-1, error=str(e))

        result = CommandResult(
            command=final_command,
            return_code=process.returncode,
            stdout=(process.stdout or "") if capture_output else "",
            stderr=(process.stderr or "") if capture_output else "",
        )

        if result.success:
            logger.debug(f"Command {cmd_str} executed successfully")
        else:
            logger.debug(f"Command {cmd_str} failed with code {process.returncode}")
            if result.stderr:
                logger.debug(f"Error output: {result.stderr.strip()}")

        return result
