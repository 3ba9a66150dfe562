"""
cordova_runner.py — Spawn the cordova CLI and collect what it prints.

Two primitives sit on top of a single executor:
  - void_action()   → ActionResult(output, status_code); nonzero exit is data
  - string_action() → output text only; the exit code is not looked at

The executor is injectable so tests can stand in for the real process.
"""

import asyncio
import os
import shutil
import sys
from dataclasses import dataclass
from typing import Awaitable, Callable, Mapping, Optional, Sequence

import config

# Longest stderr fragment echoed to the log before it is flushed without a newline.
STDERR_ECHO_MAX = 64 * 1024


class CordovaError(Exception):
    """Base class for every failure surfaced by the cordova bridge."""


class SpawnFailed(CordovaError):
    def __init__(self, argv: Sequence[str], cause: OSError):
        super().__init__(f"Could not start {argv[0]!r}: {cause}")
        self.argv = list(argv)
        self.cause = cause


class CommandTimedOut(CordovaError):
    def __init__(self, argv: Sequence[str], timeout: float, output: str = ""):
        super().__init__(f"{' '.join(argv)} timed out after {timeout}s")
        self.argv = list(argv)
        self.timeout = timeout
        self.output = output


@dataclass(frozen=True)
class ActionResult:
    output: str
    status_code: int


Executor = Callable[
    [list[str], Optional[str], Optional[Mapping[str, str]], Optional[float]],
    Awaitable[ActionResult],
]


def is_windows() -> bool:
    return sys.platform.startswith("win")


def wrap_for_host(argv: Sequence[str]) -> list[str]:
    """Route through cmd.exe on Windows, where cordova ships as a .cmd shim."""
    if is_windows():
        return ["cmd", "/s", "/c", *argv]
    return list(argv)


def _resolve_cordova_bin() -> str:
    """Resolve the cordova binary path, falling back to PATH lookup."""
    if os.path.isabs(config.CORDOVA_BIN):
        return config.CORDOVA_BIN
    found = shutil.which(config.CORDOVA_BIN)
    return found or config.CORDOVA_BIN


async def execute(
    argv: list[str],
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> ActionResult:
    """Run argv to completion and return everything it wrote to stdout."""
    cmd = wrap_for_host(argv)
    cwd = cwd or os.getcwd()
    print(f"[cordova] Starting: {' '.join(argv)} (cwd={cwd})")

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            limit=10 * 1024 * 1024,
        )
    except OSError as e:
        print(f"[cordova] Spawn failed: {e}")
        raise SpawnFailed(argv, e) from e

    out_chunks: list[bytes] = []

    async def read_stdout():
        while True:
            chunk = await proc.stdout.read(4096)
            if not chunk:
                break
            out_chunks.append(chunk)

    async def read_stderr():
        # Read in chunks: a single stderr line can exceed any readline() limit.
        pending = b""
        while True:
            chunk = await proc.stderr.read(1024)
            if not chunk:
                break
            pending += chunk
            *lines, pending = pending.split(b"\n")
            for line in lines:
                _echo_stderr(line)
            if len(pending) > STDERR_ECHO_MAX:
                _echo_stderr(pending)
                pending = b""
        _echo_stderr(pending)

    async def drain():
        await asyncio.gather(read_stdout(), read_stderr())
        return await proc.wait()

    try:
        exit_code = await asyncio.wait_for(drain(), timeout=timeout)
    except asyncio.TimeoutError:
        print(f"[cordova] Timed out after {timeout}s")
        raise CommandTimedOut(argv, timeout, _decode(out_chunks))
    except asyncio.CancelledError:
        print("[cordova] Cancelled, child killed")
        raise
    finally:
        if proc.returncode is None:
            _kill(proc)
            await proc.wait()

    output = _decode(out_chunks)
    print(f"[cordova] Done: exit_code={exit_code} output_len={len(output)}")
    return ActionResult(output=output, status_code=exit_code)


def _decode(chunks: list[bytes]) -> str:
    # Decode once so multi-byte characters split across reads stay intact.
    return b"".join(chunks).decode("utf-8", errors="replace")


def _echo_stderr(line: bytes):
    decoded = line.decode("utf-8", errors="replace").strip()
    if decoded:
        print(f"[cordova:stderr] {decoded[:500]}")


def _kill(proc: asyncio.subprocess.Process):
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass


class CordovaRunner:
    """Explicit {bin, env, timeout} for every cordova invocation."""

    def __init__(
        self,
        cordova_bin: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        executor: Optional[Executor] = None,
    ):
        self.cordova_bin = cordova_bin or _resolve_cordova_bin()
        self.env = dict(env) if env is not None else dict(os.environ)
        if timeout is None:
            timeout = config.CORDOVA_TIMEOUT
        # 0 disables the timeout
        self.timeout = timeout or None
        self._executor = executor or execute

    def argv(self, args: Sequence[str]) -> list[str]:
        return [self.cordova_bin, *args]

    async def void_action(self, args: Sequence[str], cwd: Optional[str] = None) -> ActionResult:
        return await self._executor(self.argv(args), cwd, self.env, self.timeout)

    async def string_action(self, args: Sequence[str], cwd: Optional[str] = None) -> str:
        # Exit status is dropped on purpose; callers parse whatever was printed.
        result = await self._executor(self.argv(args), cwd, self.env, self.timeout)
        return result.output
