import os
import shlex
import sys
from pathlib import Path

import pytest

from archetyper.generator.errors import HookEmptyError, HookFailedError, RenderError
from archetyper.generator.hooks import HookRunner, hook_environment

PY = shlex.quote(sys.executable)


def py(code: str) -> str:
    return f"{PY} -c {shlex.quote(code)}"


def touch(name: str) -> str:
    return py(f"open({name!r}, 'w').close()")


CTX = {"name": "demo", "year": "2026"}


def test_hooks_run_in_order_in_working_dir(tmp_path: Path):
    hooks = [
        py("open('log', 'a').write('first\\n')"),
        py("open('log', 'a').write('second {{ name }}\\n')"),
    ]
    HookRunner().run(hooks, tmp_path, CTX)
    assert (tmp_path / "log").read_text() == "first\nsecond demo\n"


def test_failing_hook_stops_the_rest(tmp_path: Path):
    hooks = [touch("one"), py("import sys; sys.exit(3)"), touch("three")]
    with pytest.raises(HookFailedError) as excinfo:
        HookRunner().run(hooks, tmp_path, CTX)
    assert excinfo.value.exit_status == 3
    assert "sys.exit(3)" in excinfo.value.command
    assert (tmp_path / "one").exists()
    assert not (tmp_path / "three").exists()


def test_quoted_arguments_are_single_words(tmp_path: Path):
    hooks = [py("import sys; open('args', 'w').write('|'.join(sys.argv[1:]))") + " 'a b' \"c d\" e\\ f"]
    HookRunner().run(hooks, tmp_path, CTX)
    assert (tmp_path / "args").read_text() == "a b|c d|e f"


def test_no_shell_expansion(tmp_path: Path):
    hooks = [py("import sys; open('args', 'w').write(sys.argv[1])") + " '$HOME'"]
    HookRunner().run(hooks, tmp_path, CTX)
    assert (tmp_path / "args").read_text() == "$HOME"


@pytest.mark.parametrize("hook", ["", "   ", "{{ '' }}"])
def test_empty_hook(tmp_path: Path, hook):
    with pytest.raises(HookEmptyError):
        HookRunner().run([hook], tmp_path, CTX)


def test_missing_program(tmp_path: Path):
    with pytest.raises(HookFailedError) as excinfo:
        HookRunner().run(["definitely-not-a-program-xyz --flag"], tmp_path, CTX)
    assert excinfo.value.exit_status is None
    assert excinfo.value.command == "definitely-not-a-program-xyz --flag"


def test_undefined_variable_in_hook(tmp_path: Path):
    with pytest.raises(RenderError) as excinfo:
        HookRunner().run(["echo {{ nope }}"], tmp_path, CTX)
    assert excinfo.value.origin == "hook #1"


def test_unbalanced_quotes(tmp_path: Path):
    with pytest.raises(RenderError):
        HookRunner().run(["echo 'oops"], tmp_path, CTX)


def test_configured_env_reaches_hook(tmp_path: Path):
    env = hook_environment({"ARCHETYPER_TEST_VAR": "hello"})
    hooks = [py("import os; open('env', 'w').write(os.environ['ARCHETYPER_TEST_VAR'])")]
    HookRunner(env=env).run(hooks, tmp_path, CTX)
    assert (tmp_path / "env").read_text() == "hello"
    assert "ARCHETYPER_TEST_VAR" not in os.environ


def test_hook_environment_prepends_path():
    env = hook_environment({"X": "1"}, [Path("/opt/tools/bin")], base={"PATH": "/usr/bin", "Y": "2"})
    assert env == {"PATH": os.pathsep.join(["/opt/tools/bin", "/usr/bin"]), "X": "1", "Y": "2"}


def test_hook_environment_does_not_mutate_base():
    base = {"PATH": "/usr/bin"}
    hook_environment({"X": "1"}, [Path("/a")], base=base)
    assert base == {"PATH": "/usr/bin"}
