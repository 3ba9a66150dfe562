import asyncio
import os
import sys

import pytest

from cordova_runner import (
    ActionResult,
    CommandTimedOut,
    CordovaRunner,
    SpawnFailed,
    execute,
    wrap_for_host,
)


def python_runner(**kwargs) -> CordovaRunner:
    """A runner whose 'cordova' is the current interpreter, so `-c` scripts stand in for the CLI."""
    kwargs.setdefault("timeout", 30)
    return CordovaRunner(cordova_bin=sys.executable, **kwargs)


@pytest.mark.asyncio
async def test_void_action_zero_exit(tmp_path):
    result = await python_runner().void_action(["-c", "print('hello')"], cwd=str(tmp_path))
    assert result == ActionResult(output="hello\n", status_code=0)


@pytest.mark.asyncio
async def test_void_action_nonzero_exit_resolves_with_status(tmp_path):
    script = "import sys; print('partial'); sys.exit(3)"
    result = await python_runner().void_action(["-c", script], cwd=str(tmp_path))
    assert result.status_code == 3
    assert result.output == "partial\n"


@pytest.mark.asyncio
async def test_string_action_returns_output_for_both_exit_codes(tmp_path):
    runner = python_runner()
    ok = await runner.string_action(["-c", "print('fine')"], cwd=str(tmp_path))
    failed = await runner.string_action(["-c", "import sys; print('broken'); sys.exit(1)"], cwd=str(tmp_path))
    assert ok == "fine\n"
    assert failed == "broken\n"


@pytest.mark.asyncio
async def test_stderr_is_not_part_of_output(tmp_path):
    script = "import sys; sys.stderr.write('noise\\n'); print('signal')"
    result = await python_runner().void_action(["-c", script], cwd=str(tmp_path))
    assert result.output == "signal\n"


@pytest.mark.asyncio
async def test_large_output_is_fully_buffered(tmp_path):
    script = "import sys; sys.stdout.write('x' * 200000)"
    result = await python_runner().void_action(["-c", script], cwd=str(tmp_path))
    assert len(result.output) == 200000


@pytest.mark.asyncio
async def test_multibyte_character_across_read_boundary(tmp_path):
    # 'é' is two bytes; the first lands at the end of the first 4096-byte read.
    script = "import sys; sys.stdout.buffer.write(b'x' * 4095 + 'é'.encode())"
    result = await python_runner().void_action(["-c", script], cwd=str(tmp_path))
    assert result.output == "x" * 4095 + "é"


@pytest.mark.asyncio
async def test_long_unterminated_stderr_line_is_drained(tmp_path):
    script = "import sys; sys.stderr.write('e' * 100000); sys.stderr.flush(); print('ok')"
    result = await python_runner().void_action(["-c", script], cwd=str(tmp_path))
    assert result == ActionResult(output="ok\n", status_code=0)


@pytest.mark.asyncio
async def test_runs_in_given_working_directory(tmp_path):
    result = await python_runner().void_action(["-c", "import os; print(os.getcwd())"], cwd=str(tmp_path))
    assert os.path.realpath(result.output.strip()) == os.path.realpath(tmp_path)


@pytest.mark.asyncio
async def test_passes_explicit_environment(tmp_path):
    env = {**os.environ, "CORDOVA_BRIDGE_PROBE": "on"}
    runner = python_runner(env=env)
    output = await runner.string_action(
        ["-c", "import os; print(os.environ.get('CORDOVA_BRIDGE_PROBE'))"], cwd=str(tmp_path))
    assert output.strip() == "on"


@pytest.mark.asyncio
async def test_argument_with_spaces_stays_one_argument(tmp_path):
    script = "import sys; print(len(sys.argv) - 1); print(sys.argv[1])"
    output = await python_runner().string_action(["-c", script, "Hello World App"], cwd=str(tmp_path))
    assert output.splitlines() == ["1", "Hello World App"]


@pytest.mark.asyncio
async def test_missing_executable_raises_spawn_failed(tmp_path):
    missing = str(tmp_path / "no-such-cordova")
    with pytest.raises(SpawnFailed) as excinfo:
        await execute([missing, "info"], cwd=str(tmp_path))
    assert isinstance(excinfo.value.cause, OSError)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert excinfo.value.argv == [missing, "info"]


@pytest.mark.asyncio
async def test_timeout_kills_process(tmp_path):
    runner = python_runner(timeout=0.5)
    script = "import sys, time; print('started'); sys.stdout.flush(); time.sleep(30)"
    with pytest.raises(CommandTimedOut) as excinfo:
        await runner.void_action(["-c", script], cwd=str(tmp_path))
    assert excinfo.value.timeout == 0.5
    assert excinfo.value.output == "started\n"


@pytest.mark.asyncio
async def test_cancellation_propagates(tmp_path):
    task = asyncio.create_task(
        python_runner(timeout=0).void_action(["-c", "import time; time.sleep(30)"], cwd=str(tmp_path)))
    await asyncio.sleep(0.5)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_runner_hands_explicit_config_to_executor():
    seen = {}

    async def fake(argv, cwd, env, timeout):
        seen.update(argv=argv, cwd=cwd, env=env, timeout=timeout)
        return ActionResult(output="out", status_code=7)

    runner = CordovaRunner(cordova_bin="cordova", env={"A": "1"}, timeout=12, executor=fake)
    result = await runner.void_action(["build", "android"], cwd="/work/app")
    assert result.status_code == 7
    assert seen == {"argv": ["cordova", "build", "android"], "cwd": "/work/app", "env": {"A": "1"}, "timeout": 12}


def test_zero_timeout_means_no_timeout():
    assert CordovaRunner(cordova_bin="cordova", timeout=0).timeout is None


def test_posix_invokes_directly(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert wrap_for_host(["cordova", "build"]) == ["cordova", "build"]


def test_windows_wraps_through_cmd(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    assert wrap_for_host(["cordova", "build", "android"]) == ["cmd", "/s", "/c", "cordova", "build", "android"]
