"""
cordova_output.py — Turn cordova's console output into records.

    cordova info           → ProjectInfo (config.xml echo + plugin names)
    cordova plugin list    → [PluginInfo]  from lines like  id 1.2.3 "Name"
    cordova platform list  → [PlatformInfo] from "Installed platforms: ..."

None of these raise: anything unrecognised is skipped.
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProjectInfo:
    config: str = ""
    plugin_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PluginInfo:
    id: str
    version: str
    name: str


@dataclass(frozen=True)
class PlatformInfo:
    id: str
    version: str


WIDGET_CLOSE = "</widget>"
PLUGINS_MARKER = "Plugins:"
INSTALLED_PREFIX = "Installed platforms:"

_PLUGIN_LINE = re.compile(r'(.+?) (.+?) "(.+?)"$')
_PLATFORM_PAIR = re.compile(r"(.+?) (.+?)$")


def _lines(output: str) -> list[str]:
    return [line.rstrip("\r") for line in output.split("\n")]


def parse_info(output: str) -> ProjectInfo:
    lines = _lines(output)

    # Pass 1: everything up to and including the closing widget tag.
    xml_lines = []
    i = 0
    while i < len(lines):
        xml_lines.append(lines[i])
        if WIDGET_CLOSE in lines[i]:
            break
        i += 1

    # Pass 2 starts on the closing-tag line itself.
    plugins = []
    enumerating = False
    for line in lines[i:]:
        if not enumerating:
            if PLUGINS_MARKER in line:
                enumerating = True
        elif line.strip():
            plugins.append(line.strip())

    return ProjectInfo(config="\n".join(xml_lines), plugin_names=plugins)


def parse_plugin_list(output: str) -> list[PluginInfo]:
    plugins = []
    for line in _lines(output):
        m = _PLUGIN_LINE.match(line)
        if m:
            plugins.append(PluginInfo(id=m.group(1), version=m.group(2), name=m.group(3)))
    return plugins


def _parse_platform_pair(text: str):
    m = _PLATFORM_PAIR.match(text.strip())
    if m:
        return PlatformInfo(id=m.group(1), version=m.group(2))
    return None


def parse_platform_list(output: str) -> list[PlatformInfo]:
    """
    Accepts both layouts cordova has used:

        Installed platforms: android 6.0.0, ios 4.3.0

        Installed platforms:
          android 9.0.0
          ios 6.1.0
        Available platforms:
          ...
    """
    installed = []
    in_block = False
    for line in _lines(output):
        if in_block:
            if not line.strip() or not line[:1].isspace():
                in_block = False
            else:
                info = _parse_platform_pair(line)
                if info:
                    installed.append(info)
                continue

        if line.rstrip() == INSTALLED_PREFIX:
            in_block = True
        elif line.startswith(INSTALLED_PREFIX + " "):
            rest = line[len(INSTALLED_PREFIX) + 1:]
            for pair in rest.split(","):
                info = _parse_platform_pair(pair)
                if info:
                    installed.append(info)
    return installed
