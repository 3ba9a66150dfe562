"""
config.py — Environment loading for the Cordova bridge.
Covers the cordova CLI itself and the Discord front end that drives it.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Discord ──────────────────────────────────────────────────────────────────
DISCORD_BOT_TOKEN: str = os.getenv("DISCORD_BOT_TOKEN", "")
DISCORD_ALLOWED_USER_ID: int = int(os.getenv("DISCORD_ALLOWED_USER_ID", "0"))

# ── Workspaces ───────────────────────────────────────────────────────────────
WORKSPACES_PATH: str = os.getenv("WORKSPACES_PATH", "./workspaces.json")
DEFAULT_WORKSPACE: str = os.getenv("DEFAULT_WORKSPACE", "")

# ── Projects ─────────────────────────────────────────────────────────────────
BASE_PROJECTS_DIR: str = os.getenv("BASE_PROJECTS_DIR", os.path.expanduser("~/Projects"))

# ── Cordova ──────────────────────────────────────────────────────────────────
CORDOVA_BIN: str = os.getenv("CORDOVA_BIN", "cordova")
# 0 means no timeout; a hung cordova process then blocks its caller.
CORDOVA_TIMEOUT: float = float(os.getenv("CORDOVA_TIMEOUT", "0"))
CORDOVA_SERVE_PORT: int = int(os.getenv("CORDOVA_SERVE_PORT", "8000"))
# Reverse-domain prefix for app ids when /create is given only a name.
CORDOVA_ID_PREFIX: str = os.getenv("CORDOVA_ID_PREFIX", "")

# ── Limits ───────────────────────────────────────────────────────────────────
MAX_DISCORD_MSG_LEN: int = 1900


def validate() -> list[str]:
    problems = []
    if not DISCORD_BOT_TOKEN:
        problems.append("DISCORD_BOT_TOKEN is not set")
    if DISCORD_ALLOWED_USER_ID == 0:
        problems.append("DISCORD_ALLOWED_USER_ID is not set")
    if CORDOVA_TIMEOUT < 0:
        problems.append(f"CORDOVA_TIMEOUT must be >= 0, got {CORDOVA_TIMEOUT}")
    if not Path(BASE_PROJECTS_DIR).is_dir():
        problems.append(f"BASE_PROJECTS_DIR not found at {BASE_PROJECTS_DIR}")
    return problems


def print_config_summary():
    token_preview = DISCORD_BOT_TOKEN[:8] + "..." if DISCORD_BOT_TOKEN else "(not set)"
    print(f"  Discord token:   {token_preview}")
    print(f"  Allowed user:    {DISCORD_ALLOWED_USER_ID}")
    print(f"  Cordova:         {CORDOVA_BIN} (timeout: {CORDOVA_TIMEOUT or 'none'})")
    print(f"  Projects dir:    {BASE_PROJECTS_DIR}")
    print(f"  Workspaces:      {WORKSPACES_PATH}")
    print(f"  Default ws:      {DEFAULT_WORKSPACE or '(none)'}")
