from __future__ import annotations

from pathlib import Path

import pytest

from gradlestep.command import ArgumentListBuilder, build_arguments, normalize, working_directory


def _args(**kw):
    params = dict(
        is_unix=True,
        switches=None,
        tasks=None,
        build_file=None,
        build_variables={},
        environment={},
    )
    params.update(kw)
    return build_arguments("gradle", **params).to_list()


def test_normalize_collapses_tabs_and_newlines():
    text = "--info\t\t--stacktrace\r\n\n--offline"
    out = normalize(text)
    assert "\t" not in out and "\n" not in out and "\r" not in out
    assert out.split() == ["--info", "--stacktrace", "--offline"]
    assert normalize(None) == ""


def test_build_variables_come_first_in_order():
    args = _args(build_variables={"b": "2", "a": "1"}, switches="--info")
    assert args == ["gradle", "-Db=2", "-Da=1", "--info"]


def test_switches_expand_environment_then_build_variables():
    args = _args(
        switches="-Pv=${VERSION} -Pc=${CHANNEL} -Pm=${MISSING}",
        environment={"VERSION": "1.2"},
        build_variables={"CHANNEL": "beta"},
    )
    assert args[-3:] == ["-Pv=1.2", "-Pc=beta", "-Pm=${MISSING}"]


def test_environment_wins_over_build_variables_in_switches():
    args = _args(switches="${X}", environment={"X": "env"}, build_variables={"X": "var"})
    assert args[-1] == "env"


def test_tasks_are_never_expanded():
    args = _args(tasks="clean ${FOO}", environment={"FOO": "build"}, build_variables={"FOO": "x"})
    assert args[-2:] == ["clean", "${FOO}"]


def test_quoted_switches_stay_together():
    args = _args(switches='-Pmsg="hello world" --info', tasks="clean\nbuild")
    assert args == ["gradle", "-Pmsg=hello world", "--info", "clean", "build"]


def test_unbalanced_quotes_raise():
    with pytest.raises(ValueError):
        _args(switches='-Pmsg="oops')


def test_build_file_is_appended_after_tasks():
    args = _args(tasks="build", build_file="  ${SUB}/build.gradle ", environment={"SUB": "app"})
    assert args == ["gradle", "build", "-b", "app/build.gradle"]


def test_blank_build_file_adds_nothing():
    assert "-b" not in _args(tasks="build", build_file="   ")
    assert "-b" not in _args(tasks="build", build_file=None)


def test_build_file_plain():
    assert _args(tasks="build", build_file="build.gradle")[-2:] == ["-b", "build.gradle"]


def test_windows_wrapping():
    args = build_arguments(
        "gradle.bat",
        is_unix=False,
        switches="--info",
        tasks="build",
        build_file="build.gradle",
        build_variables={"k": "v"},
        environment={},
    ).to_list()
    assert args[:2] == ["cmd.exe", "/C"]
    assert args[-3:] == ["&&", "exit", "%%ERRORLEVEL%%"]
    assert args[2:-3] == ["gradle.bat", "-Dk=v", "--info", "build", "-b", "build.gradle"]


def test_argument_list_builder():
    args = ArgumentListBuilder("a").add("b").prepend("x", "y").add_key_value_pairs("-D", {"k": "v w"})
    assert args.to_list() == ["x", "y", "a", "b", "-Dk=v w"]
    assert args.to_string() == "x y a b '-Dk=v w'"
    assert len(args) == 5


def test_working_directory_defaults_to_module_root(tmp_path):
    assert working_directory(tmp_path, None, {}, {}) == tmp_path
    assert working_directory(tmp_path, "  ", {}, {}) == tmp_path


def test_working_directory_expands_env_then_build_variables(tmp_path):
    pwd = working_directory(tmp_path, " ${PART}/${SUB} ", {"PART": "mod"}, {"SUB": "gradle", "PART": "no"}.get)
    assert pwd == tmp_path / "mod" / "gradle"


def test_working_directory_absolute(tmp_path):
    other = tmp_path / "elsewhere"
    assert working_directory(Path("/work"), str(other), {}, {}) == other
