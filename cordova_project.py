"""
cordova_project.py — A Cordova project directory and everything the CLI can do to it.

    project = await CordovaProject.create("HelloApp", "com.example.hello", "Hello App")
    project = await CordovaProject.open("/path/to/HelloApp")

    await project.build("android", ["--release"])   → ActionResult
    await project.get_plugins()                     → [PluginInfo]
    await project.add_platform("ios", PlatformAddOptions(save=True))

Every call spawns one cordova process in the project directory and waits
for it to exit. A nonzero exit is reported through ActionResult.status_code,
never raised, except for create().
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from cordova_output import (
    PlatformInfo,
    PluginInfo,
    ProjectInfo,
    parse_info,
    parse_platform_list,
    parse_plugin_list,
)
from cordova_runner import ActionResult, CordovaError, CordovaRunner, is_windows

__version__ = "0.0.1-dev"

CONFIG_XML = "config.xml"


class NotACordovaProject(CordovaError):
    def __init__(self, path):
        super().__init__(f"{path} is not a Cordova application (no {CONFIG_XML}).")
        self.path = str(path)


class CreationFailed(CordovaError):
    def __init__(self, status_code: int, output: str):
        super().__init__(f"cordova create exited with {status_code}")
        self.status_code = status_code
        self.output = output


class OperationNotImplemented(CordovaError, NotImplementedError):
    pass


@dataclass(frozen=True)
class PluginAddOptions:
    search_paths: Optional[Sequence[str]] = None
    no_registry: bool = False
    link: bool = False
    save: bool = False
    shrinkwrap: bool = False
    experimental_browserify: bool = False


@dataclass(frozen=True)
class ComponentRemoveOptions:
    save: bool = False


@dataclass(frozen=True)
class PlatformAddOptions:
    use_git: bool = False
    save: bool = False
    link: bool = False


def plugin_add_args(search_spec: str, options: Optional[PluginAddOptions] = None) -> list[str]:
    args = ["plugin", "add", search_spec]
    if options:
        if options.search_paths:
            sep = ";" if is_windows() else ":"
            args += ["--searchpath", sep.join(options.search_paths)]
        if options.no_registry:
            args.append("--noregistry")
        if options.link:
            args.append("--link")
        if options.save:
            args.append("--save")
        if options.shrinkwrap:
            args.append("--shrinkwrap")
        if options.experimental_browserify:
            args.append("--browserify")
    return args


def plugin_remove_args(plugin_id: str, options: Optional[ComponentRemoveOptions] = None) -> list[str]:
    args = ["plugin", "remove", plugin_id]
    if options and options.save:
        args.append("--save")
    return args


def platform_add_args(search_spec: str, options: Optional[PlatformAddOptions] = None) -> list[str]:
    args = ["platform", "add", search_spec]
    if options:
        if options.use_git:
            args.append("--usegit")
        if options.save:
            args.append("--save")
        if options.link:
            args.append("--link")
    return args


def platform_remove_args(name: str, options: Optional[ComponentRemoveOptions] = None) -> list[str]:
    args = ["platform", "remove", name]
    if options and options.save:
        args.append("--save")
    return args


def platform_update_args(name: Optional[str] = None, options: Optional[PlatformAddOptions] = None) -> list[str]:
    args = ["platform", "update"]
    if name:
        args.append(name)
    # options.link is not forwarded: cordova's update never took it.
    if options:
        if options.use_git:
            args.append("--usegit")
        if options.save:
            args.append("--save")
    return args


class CordovaProject:

    def __init__(self, path, runner: Optional[CordovaRunner] = None):
        self._path = str(path)
        self._runner = runner or CordovaRunner()

    def __repr__(self):
        return f"CordovaProject({self._path!r})"

    @property
    def path(self) -> str:
        return self._path

    @staticmethod
    def version() -> str:
        return __version__

    # ── Construction ─────────────────────────────────────────────────────────

    @classmethod
    async def create(
        cls,
        name: str,
        id: Optional[str] = None,
        title: Optional[str] = None,
        *,
        cwd: Optional[str] = None,
        runner: Optional[CordovaRunner] = None,
    ) -> "CordovaProject":
        """Scaffold ./<name> with `cordova create` and open it."""
        runner = runner or CordovaRunner()
        cwd = cwd or os.getcwd()
        args = ["create", name]
        if id:
            args.append(id)
        if title:
            args.append(title)

        result = await runner.void_action(args, cwd=cwd)
        if result.status_code != 0:
            raise CreationFailed(result.status_code, result.output)
        return await cls.open(Path(cwd) / name, runner=runner)

    @classmethod
    async def open(cls, directory, *, runner: Optional[CordovaRunner] = None) -> "CordovaProject":
        config_xml = Path(directory) / CONFIG_XML
        try:
            os.stat(config_xml)
        except OSError as e:
            raise NotACordovaProject(directory) from e
        return cls(directory, runner=runner)

    # ── Common ───────────────────────────────────────────────────────────────

    async def prepare(self, platform: Optional[str] = None, args: Optional[Sequence[str]] = None) -> ActionResult:
        return await self._platform_command("prepare", platform, args)

    async def compile(self, platform: Optional[str] = None, args: Optional[Sequence[str]] = None) -> ActionResult:
        return await self._platform_command("compile", platform, args)

    async def build(self, platform: Optional[str] = None, args: Optional[Sequence[str]] = None) -> ActionResult:
        return await self._platform_command("build", platform, args)

    async def run(self, platform: Optional[str] = None, args: Optional[Sequence[str]] = None) -> ActionResult:
        return await self._platform_command("run", platform, args)

    async def emulate(self, platform: Optional[str] = None, args: Optional[Sequence[str]] = None) -> ActionResult:
        return await self._platform_command("emulate", platform, args)

    async def _platform_command(self, verb: str, platform: Optional[str], args: Optional[Sequence[str]]) -> ActionResult:
        cmd = [verb]
        if platform:
            cmd.append(platform)
        if args:
            cmd += list(args)
        return await self._runner.void_action(cmd, cwd=self._path)

    async def serve(self) -> ActionResult:
        return await self._runner.void_action(["serve"], cwd=self._path)

    async def get_info(self) -> ProjectInfo:
        output = await self._runner.string_action(["info"], cwd=self._path)
        return parse_info(output)

    # ── Plugins ──────────────────────────────────────────────────────────────

    async def get_plugins(self) -> list[PluginInfo]:
        output = await self._runner.string_action(["plugin", "list"], cwd=self._path)
        return parse_plugin_list(output)

    async def add_plugin(self, search_spec: str, options: Optional[PluginAddOptions] = None) -> ActionResult:
        return await self._runner.void_action(plugin_add_args(search_spec, options), cwd=self._path)

    async def remove_plugin(self, plugin_id: str, options: Optional[ComponentRemoveOptions] = None) -> ActionResult:
        return await self._runner.void_action(plugin_remove_args(plugin_id, options), cwd=self._path)

    # ── Platforms ────────────────────────────────────────────────────────────

    async def get_platforms(self) -> list[PlatformInfo]:
        output = await self._runner.string_action(["platform", "list"], cwd=self._path)
        return parse_platform_list(output)

    async def add_platform(self, search_spec: str, options: Optional[PlatformAddOptions] = None) -> ActionResult:
        return await self._runner.void_action(platform_add_args(search_spec, options), cwd=self._path)

    async def remove_platform(self, name: str, options: Optional[ComponentRemoveOptions] = None) -> ActionResult:
        return await self._runner.void_action(platform_remove_args(name, options), cwd=self._path)

    async def update(self, name: Optional[str] = None, options: Optional[PlatformAddOptions] = None) -> ActionResult:
        return await self._runner.void_action(platform_update_args(name, options), cwd=self._path)

    async def check_for_updates(self) -> list[PlatformInfo]:
        raise OperationNotImplemented("Not yet implemented.")
