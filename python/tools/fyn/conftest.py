"""Shared fixtures and fakes for the fyn tests."""

from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from .config import FynConfig
from .models import CommandResult, PackageRecord, PackageSource


class ScriptedChannel:
    """IOChannel that replays canned input lines and records all output."""

    def __init__(self, inputs: Optional[List[Optional[str]]] = None):
        self.inputs = list(inputs or [])
        self.output: List[str] = []
        self.prompts: List[str] = []

    def write(self, text: str = "") -> None:
        self.output.append(text)

    def read_line(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if not self.inputs:
            return None
        return self.inputs.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


class FakeRunner:
    """
    ProcessRunner stand-in.

    Results are looked up by the command's first two words, e.g.
    ("git", "pull"); unknown commands succeed. Handlers can be callables
    to simulate side effects such as a clone creating its directory.
    """

    def __init__(self, results: Optional[Dict[tuple, object]] = None):
        self.results = results or {}
        self.calls: List[dict] = []

    def run(self, command, cwd=None, capture_output=True, privileged=False):
        self.calls.append(
            {
                "command": list(command),
                "cwd": Path(cwd) if cwd is not None else None,
                "capture_output": capture_output,
                "privileged": privileged,
            }
        )
        handler = self.results.get(tuple(command[:2]))
        if callable(handler):
            return handler(command, cwd)
        if handler is None:
            return CommandResult(command=list(command), return_code=0)
        return handler

    def commands(self) -> List[List[str]]:
        return [call["command"] for call in self.calls]


class FakeArchive:
    """ArchiveClient stand-in with canned results."""

    def __init__(
        self,
        packages: Optional[List[PackageRecord]] = None,
        build_base: Optional[Callable[[str], str]] = None,
    ):
        self.packages = packages or []
        self.build_base = build_base or (lambda name: name)
        self.searched: List[str] = []
        self.looked_up: List[str] = []

    async def search(self, query: str) -> List[PackageRecord]:
        self.searched.append(query)
        return list(self.packages)

    async def fetch_build_base(self, name: str) -> str:
        self.looked_up.append(name)
        return self.build_base(name)


def failed(command: List[str], code: int = 1, stderr: str = "") -> CommandResult:
    return CommandResult(command=list(command), return_code=code, stderr=stderr)


def official(name: str, version: str = "1.0-1", repo: str = "extra") -> PackageRecord:
    return PackageRecord(
        source=PackageSource.OFFICIAL,
        name=name,
        version=version,
        description=f"{name} description",
        repository=repo,
    )


def archive(name: str, version: str = "1.0-1", build_base: str = "") -> PackageRecord:
    return PackageRecord(
        source=PackageSource.ARCHIVE,
        name=name,
        version=version,
        description=f"{name} from the AUR",
        build_base=build_base,
    )


@pytest.fixture
def config(tmp_path: Path) -> FynConfig:
    """Config whose cache lives in a temporary directory."""
    return FynConfig(cache_dir=tmp_path / "cache", use_sudo=False)


@pytest.fixture
def channel() -> ScriptedChannel:
    return ScriptedChannel()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()
