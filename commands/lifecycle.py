"""
commands/lifecycle.py — /prepare /compile /build /run /emulate /serve /info.
"""

import asyncio
from typing import Optional

import config
from cordova_project import CordovaProject
from cordova_runner import ActionResult, CordovaError


def extract_error(raw_output: str, max_lines: int = 40) -> str:
    lines = raw_output.splitlines()
    # Gradle / xcodebuild failures
    for i, line in enumerate(lines):
        if "BUILD FAILED" in line or "FAILURE:" in line:
            return "\n".join(lines[max(0, i - 5):i + max_lines])
    # cordova's own errors
    for i, line in enumerate(lines):
        if line.lstrip().startswith(("Error:", "CordovaError")) or "error:" in line.lower():
            return "\n".join(lines[i:i + max_lines])
    return "\n".join(lines[-max_lines:])


def format_action(label: str, result: ActionResult) -> str:
    if result.status_code == 0:
        return f"✅ {label} succeeded."
    tail = extract_error(result.output) or "(no output)"
    return f"❌ {label} failed (exit {result.status_code}):\n```\n{tail[:1200]}\n```"


async def handle_platform_command(
    project: CordovaProject,
    verb: str,
    platform: Optional[str] = None,
    args: Optional[list[str]] = None,
) -> str:
    action = getattr(project, verb)
    label = f"`cordova {verb}`" + (f" [{platform}]" if platform else "")
    try:
        result = await action(platform, args or None)
    except CordovaError as e:
        return f"❌ {label}: {e}"
    return format_action(label, result)


async def handle_info(project: CordovaProject) -> str:
    try:
        info = await project.get_info()
    except CordovaError as e:
        return f"❌ `cordova info`: {e}"
    plugins = "\n".join(f"• {name}" for name in info.plugin_names) or "(none)"
    config_preview = info.config.strip()
    if len(config_preview) > 1000:
        config_preview = config_preview[:1000] + "\n…"
    return (
        f"**config.xml**\n```xml\n{config_preview or '(empty)'}\n```\n"
        f"**Plugins:**\n{plugins}"
    )


# ── Serve ────────────────────────────────────────────────────────────────────

# One `cordova serve` per workspace; it runs until stopped.
_serve_tasks: dict[str, asyncio.Task] = {}


def is_serving(ws_key: str) -> bool:
    task = _serve_tasks.get(ws_key)
    return task is not None and not task.done()


def _on_serve_done(ws_key: str, task: asyncio.Task):
    if _serve_tasks.get(ws_key) is task:
        del _serve_tasks[ws_key]
    if task.cancelled():
        print(f"[serve] {ws_key}: stopped")
    elif task.exception() is not None:
        print(f"[serve] {ws_key}: failed: {task.exception()}")
    else:
        print(f"[serve] {ws_key}: exited with {task.result().status_code}")


async def handle_serve_start(ws_key: str, project: CordovaProject) -> str:
    if is_serving(ws_key):
        return f"🌐 **{ws_key}** is already being served on port {config.CORDOVA_SERVE_PORT}."
    task = asyncio.create_task(project.serve())
    task.add_done_callback(lambda t: _on_serve_done(ws_key, t))
    _serve_tasks[ws_key] = task
    return f"🌐 Serving **{ws_key}** on port {config.CORDOVA_SERVE_PORT}. `/serve stop` to end."


async def handle_serve_stop(ws_key: str) -> str:
    task = _serve_tasks.get(ws_key)
    if task is None or task.done():
        return f"**{ws_key}** is not being served."
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    return f"🛑 Stopped serving **{ws_key}**."
