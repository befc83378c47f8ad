#  Copyright (c) 2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
#

import textwrap

from envf.loader import LoadError, load_env_file, table_into_env_map


def _write(tmp_path, body: str, name: str = "env.toml"):
    p = tmp_path / name
    p.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return str(p)


def test_load_all_scalar_kinds(tmp_path):
    path = _write(tmp_path, """
        NAME = "envf"
        PORT = 8080
        RATIO = 0.5
        DEBUG = true
        SINCE = 1979-05-27T07:32:00Z
        DAY = 1979-05-27
    """)
    assert load_env_file(path) == {
        "NAME": "envf",
        "PORT": "8080",
        "RATIO": "0.5",
        "DEBUG": "true",
        "SINCE": "1979-05-27T07:32:00Z",
        "DAY": "1979-05-27",
    }


def test_empty_file_is_empty_map(tmp_path):
    assert load_env_file(_write(tmp_path, "")) == {}


def test_missing_file(tmp_path):
    result = load_env_file(str(tmp_path / "missing.toml"))
    assert isinstance(result, LoadError)
    assert str(result).startswith("Could not read contents: ")
    assert "No such file or directory" in str(result)


def test_directory_is_unreadable(tmp_path):
    result = load_env_file(str(tmp_path))
    assert isinstance(result, LoadError)
    assert str(result).startswith("Could not read contents: ")


def test_not_utf8(tmp_path):
    p = tmp_path / "latin1.toml"
    p.write_bytes(b'A = "caf\xe9"\n')
    result = load_env_file(str(p))
    assert isinstance(result, LoadError)
    assert str(result).startswith("Could not read contents: not valid UTF-8")


def test_invalid_toml(tmp_path):
    result = load_env_file(_write(tmp_path, "A = \n"))
    assert isinstance(result, LoadError)
    assert str(result).startswith("Invalid TOML: ")


def test_top_level_not_a_table(tmp_path):
    path = _write(tmp_path, "whatever")
    result = load_env_file(path, parse=lambda text: [text])
    assert result == LoadError("Unexpected format: top level is a list, not a table")


def test_array_rejects_whole_file(tmp_path):
    path = _write(tmp_path, """
        A = "1"
        B = [1, 2]
        C = "3"
    """)
    result = load_env_file(path)
    assert isinstance(result, LoadError)
    assert str(result) == "value for B ([1, 2]) can't be converted into a string"


def test_sub_table_rejects_whole_file(tmp_path):
    path = _write(tmp_path, """
        A = "1"

        [section]
        B = "2"
    """)
    result = load_env_file(path)
    assert isinstance(result, LoadError)
    assert "value for section" in str(result)


def test_first_bad_field_is_reported():
    result = table_into_env_map({"A": "ok", "B": [1], "C": {"x": 1}})
    assert result == LoadError("value for B ([1]) can't be converted into a string")


def test_bad_variable_names_rejected(tmp_path):
    result = load_env_file(_write(tmp_path, '"A=B" = "x"\n'))
    assert isinstance(result, LoadError)
    assert "not a valid environment variable name" in str(result)

    result = load_env_file(_write(tmp_path, '"" = "x"\n', name="empty.toml"))
    assert isinstance(result, LoadError)


def test_nul_in_value_rejected(tmp_path):
    result = load_env_file(_write(tmp_path, 'A = "x\\u0000y"\n'))
    assert isinstance(result, LoadError)
    assert "value for A" in str(result)


def test_fractional_seconds_are_trimmed(tmp_path):
    path = _write(tmp_path, """
        T = 1979-05-27T00:32:00.5-07:00
        L = 07:32:00.25
        U = 1979-05-27T07:32:00+00:00
    """)
    assert load_env_file(path) == {
        "T": "1979-05-27T00:32:00.5-07:00",
        "L": "07:32:00.25",
        "U": "1979-05-27T07:32:00Z",
    }
