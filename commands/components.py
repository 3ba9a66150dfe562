"""
commands/components.py — /plugins /plugin /platforms /platform /update /outdated.

Flags after the plugin or platform name map onto the option records:

    /plugin add <spec> [--searchpath DIR]... [--noregistry] [--link] [--save]
                       [--shrinkwrap] [--browserify]
    /plugin rm <id> [--save]
    /platform add <spec> [--usegit] [--save] [--link]
    /platform rm <name> [--save]
    /update [name] [--usegit] [--save]
"""

from typing import Optional

from cordova_project import (
    ComponentRemoveOptions,
    CordovaProject,
    PlatformAddOptions,
    PluginAddOptions,
)
from cordova_runner import CordovaError
from commands.lifecycle import format_action


class FlagError(ValueError):
    pass


def parse_plugin_add_flags(tokens: list[str]) -> PluginAddOptions:
    search_paths: list[str] = []
    flags = set()
    it = iter(tokens)
    for tok in it:
        if tok == "--searchpath":
            value = next(it, None)
            if value is None:
                raise FlagError("`--searchpath` needs a directory")
            search_paths.append(value)
        elif tok.startswith("--searchpath="):
            search_paths.append(tok.split("=", 1)[1])
        elif tok in ("--noregistry", "--link", "--save", "--shrinkwrap", "--browserify"):
            flags.add(tok)
        else:
            raise FlagError(f"Unknown flag `{tok}`")
    return PluginAddOptions(
        search_paths=search_paths or None,
        no_registry="--noregistry" in flags,
        link="--link" in flags,
        save="--save" in flags,
        shrinkwrap="--shrinkwrap" in flags,
        experimental_browserify="--browserify" in flags,
    )


def parse_platform_flags(tokens: list[str], allowed=("--usegit", "--save", "--link")) -> PlatformAddOptions:
    for tok in tokens:
        if tok not in allowed:
            raise FlagError(f"Unknown flag `{tok}`")
    return PlatformAddOptions(
        use_git="--usegit" in tokens,
        save="--save" in tokens,
        link="--link" in tokens,
    )


def parse_remove_flags(tokens: list[str]) -> ComponentRemoveOptions:
    for tok in tokens:
        if tok != "--save":
            raise FlagError(f"Unknown flag `{tok}`")
    return ComponentRemoveOptions(save="--save" in tokens)


# ── Plugins ──────────────────────────────────────────────────────────────────

async def handle_plugins(project: CordovaProject) -> str:
    try:
        plugins = await project.get_plugins()
    except CordovaError as e:
        return f"❌ `cordova plugin list`: {e}"
    if not plugins:
        return "No plugins added."
    lines = [f"• `{p.id}` {p.version} — {p.name}" for p in plugins]
    return "**Plugins:**\n" + "\n".join(lines)


async def handle_plugin(project: CordovaProject, sub: Optional[str], target: Optional[str], flags: list[str]) -> str:
    if not target:
        return "Usage: `/plugin add <spec> [flags]` or `/plugin rm <id> [--save]`"
    try:
        if sub == "add":
            options = parse_plugin_add_flags(flags)
            result = await project.add_plugin(target, options)
        else:
            options = parse_remove_flags(flags)
            result = await project.remove_plugin(target, options)
    except FlagError as e:
        return f"🛑 {e}"
    except CordovaError as e:
        return f"❌ `cordova plugin {sub}`: {e}"
    return format_action(f"`plugin {sub} {target}`", result)


# ── Platforms ────────────────────────────────────────────────────────────────

async def handle_platforms(project: CordovaProject) -> str:
    try:
        platforms = await project.get_platforms()
    except CordovaError as e:
        return f"❌ `cordova platform list`: {e}"
    if not platforms:
        return "No platforms installed."
    return "**Installed platforms:**\n" + "\n".join(f"• `{p.id}` {p.version}" for p in platforms)


async def handle_platform(project: CordovaProject, sub: Optional[str], target: Optional[str], flags: list[str]) -> str:
    if not target:
        return "Usage: `/platform add <spec> [flags]` or `/platform rm <name> [--save]`"
    try:
        if sub == "add":
            result = await project.add_platform(target, parse_platform_flags(flags))
        else:
            result = await project.remove_platform(target, parse_remove_flags(flags))
    except FlagError as e:
        return f"🛑 {e}"
    except CordovaError as e:
        return f"❌ `cordova platform {sub}`: {e}"
    return format_action(f"`platform {sub} {target}`", result)


async def handle_update(project: CordovaProject, name: Optional[str], flags: list[str]) -> str:
    try:
        options = parse_platform_flags(flags, allowed=("--usegit", "--save"))
        result = await project.update(name, options)
    except FlagError as e:
        return f"🛑 {e}"
    except CordovaError as e:
        return f"❌ `cordova platform update`: {e}"
    return format_action("`platform update`" + (f" [{name}]" if name else ""), result)


async def handle_outdated(project: CordovaProject) -> str:
    # check_for_updates always raises; the reply points at /update instead.
    try:
        await project.check_for_updates()
    except NotImplementedError:
        pass
    return "🚧 Checking for platform updates is not supported yet. Use `/update <platform>`."
