"""
parser.py — Message grammar for the Cordova bridge bot.

    /create <Name> [id] [title]        → cordova create, registers a workspace
    /open <path> [key]                 → register an existing project
    /build [platform] [args...]        → also /prepare /compile /run /emulate
    /serve [stop]                      → cordova serve in the background
    /info                              → cordova info
    /plugins                           → cordova plugin list
    /plugin add <spec> [flags]         → cordova plugin add
    /plugin rm <id> [--save]           → cordova plugin remove
    /platforms                         → cordova platform list
    /platform add|rm <spec> [flags]    → cordova platform add / remove
    /update [platform] [flags]         → cordova platform update
    /outdated                          → check for platform updates
"""

from dataclasses import dataclass, field
from typing import Optional
import re
import shlex


@dataclass
class WorkspacePrompt:
    workspace: str
    prompt: str


@dataclass
class Command:
    name: str
    workspace: Optional[str] = None
    raw_cmd: Optional[str] = None
    platform: Optional[str] = None
    sub: Optional[str] = None
    arg: Optional[str] = None
    args: list[str] = field(default_factory=list)


@dataclass
class FallbackPrompt:
    prompt: str


ParseResult = WorkspacePrompt | Command | FallbackPrompt

PLATFORM_VERBS = {"prepare", "compile", "build", "run", "emulate"}

SUB_ALIASES = {
    "add": "add",
    "rm": "remove",
    "remove": "remove",
    "ls": "list",
    "list": "list",
}


def _tokens(text: str) -> list[str]:
    try:
        return shlex.split(text)
    except ValueError:
        return text.split()


def _parse_platform(tokens: list[str]) -> tuple[Optional[str], list[str]]:
    """A leading token that is not a flag names the platform."""
    if tokens and not tokens[0].startswith("-"):
        return tokens[0].lower(), tokens[1:]
    return None, tokens


def _parse_component(name: str, rest: str) -> Command:
    tokens = _tokens(rest)
    if not tokens:
        return Command(name=f"{name}s")
    sub = SUB_ALIASES.get(tokens[0].lower())
    if sub is None:
        return Command(name="unknown", raw_cmd=f"/{name} {rest}")
    if sub == "list":
        return Command(name=f"{name}s")
    return Command(
        name=name,
        sub=sub,
        arg=tokens[1] if len(tokens) > 1 else None,
        args=tokens[2:],
    )


def parse(text: str) -> ParseResult:
    text = text.strip()

    # @workspace prompt
    m = re.match(r"^@(\S+)\s+(.+)", text, re.DOTALL)
    if m:
        return WorkspacePrompt(workspace=m.group(1).lower(), prompt=m.group(2).strip())

    if text.startswith("/"):
        parts = text.split(None, 1)
        cmd = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        match cmd:
            case "/help":
                return Command(name="help")
            case "/ls" | "/workspaces":
                return Command(name="ls")
            case "/use":
                return Command(name="use", workspace=rest.lower() or None)
            case "/where":
                return Command(name="where")

            # ── Projects ─────────────────────────────────────────────
            case "/create":
                return Command(name="create", raw_cmd=rest or None, args=_tokens(rest))
            case "/open":
                tokens = _tokens(rest)
                return Command(
                    name="open",
                    arg=tokens[0] if tokens else None,
                    workspace=tokens[1].lower() if len(tokens) > 1 else None,
                )
            case "/rename":
                tokens = _tokens(rest)
                return Command(name="rename",
                               workspace=tokens[0].lower() if tokens else None,
                               arg=tokens[1].lower() if len(tokens) > 1 else None)

            # ── Lifecycle ────────────────────────────────────────────
            case "/prepare" | "/compile" | "/build" | "/run" | "/emulate":
                platform, args = _parse_platform(_tokens(rest))
                return Command(name=cmd[1:], platform=platform, args=args)
            case "/serve":
                return Command(name="serve", sub="stop" if rest.lower() == "stop" else "start")
            case "/info":
                return Command(name="info")

            # ── Plugins & platforms ──────────────────────────────────
            case "/plugins":
                return Command(name="plugins")
            case "/plugin":
                return _parse_component("plugin", rest)
            case "/platforms":
                return Command(name="platforms")
            case "/platform":
                return _parse_component("platform", rest)
            case "/update":
                platform, args = _parse_platform(_tokens(rest))
                return Command(name="update", platform=platform, args=args)
            case "/outdated":
                return Command(name="outdated")

            case _:
                return Command(name="unknown", raw_cmd=text)

    return FallbackPrompt(prompt=text)
