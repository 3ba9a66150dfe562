from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import pytest

from cordova_project import CordovaProject
from cordova_runner import ActionResult, CordovaRunner


@dataclass
class Call:
    argv: list[str]
    cwd: Optional[str]
    env: Optional[dict]
    timeout: Optional[float]


class FakeExecutor:
    """Stands in for the cordova process: records argv, replays canned output."""

    def __init__(self, output: str = "", status_code: int = 0, on_call: Optional[Callable] = None):
        self.output = output
        self.status_code = status_code
        self.on_call = on_call
        self.calls: list[Call] = []

    async def __call__(self, argv, cwd, env, timeout):
        self.calls.append(Call(list(argv), cwd, env, timeout))
        if self.on_call:
            self.on_call(argv, cwd)
        return ActionResult(output=self.output, status_code=self.status_code)

    @property
    def last_args(self) -> list[str]:
        # Drop the cordova binary itself
        return self.calls[-1].argv[1:]


def write_config_xml(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    config_xml = directory / "config.xml"
    config_xml.write_text('<?xml version="1.0"?>\n<widget id="com.example.hello"></widget>\n')
    return config_xml


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def runner(executor):
    return CordovaRunner(cordova_bin="cordova", env={"PATH": "/usr/bin"}, timeout=0, executor=executor)


@pytest.fixture
def project_dir(tmp_path):
    directory = tmp_path / "HelloApp"
    write_config_xml(directory)
    return directory


@pytest.fixture
def project(project_dir, runner):
    return CordovaProject(project_dir, runner=runner)
