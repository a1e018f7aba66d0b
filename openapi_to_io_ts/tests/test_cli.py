"""
Tests for the command line interface.
"""

from __future__ import annotations

import json
import logging
import textwrap

import pytest
from click.testing import CliRunner

from openapi_to_io_ts.openapi_to_io_ts import openapi_to_io_ts

PETSTORE = textwrap.dedent(
    """
    openapi: 3.0.0
    components:
      schemas:
        Pet:
          type: object
          required:
            - name
          properties:
            name:
              type: string
            age:
              type: integer
    """
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def petstore(tmp_path):
    path = tmp_path / "petstore.yaml"
    path.write_text(PETSTORE, encoding="utf-8")
    return path


def run(runner, *args):
    return runner.invoke(openapi_to_io_ts, ["generate", *[str(a) for a in args]])


def test_generate_writes_file(runner, petstore, tmp_path):
    out_dir = tmp_path / "out"
    result = run(runner, "--input", petstore, "--output", out_dir)

    assert result.exit_code == 0, result.output
    generated = (out_dir / "file.ts").read_text(encoding="utf-8")
    assert generated.startswith("/* eslint-disable */\nimport * as t from 'io-ts'\n\n")
    assert "export const Pet = t.intersection([t.type({\n  name: t.string\n}), t.partial({\n  age: t.Int\n})])" in generated
    assert "export type Pet = t.TypeOf<typeof Pet>" in generated
    assert str(out_dir / "file.ts") in result.output


def test_short_options(runner, petstore, tmp_path):
    result = run(runner, "-i", petstore, "-o", tmp_path / "out")
    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "file.ts").exists()


def test_overwrites_by_default(runner, petstore, tmp_path):
    (tmp_path / "file.ts").write_text("stale")
    result = run(runner, "-i", petstore, "-o", tmp_path)
    assert result.exit_code == 0, result.output
    assert (tmp_path / "file.ts").read_text() != "stale"


def test_missing_input(runner, tmp_path):
    result = run(runner, "-i", tmp_path / "missing.yaml", "-o", tmp_path / "out")
    assert result.exit_code == 1
    assert "cannot read" in result.output
    assert not (tmp_path / "out").exists()


def test_not_an_openapi_document(runner, tmp_path):
    swagger = tmp_path / "swagger.json"
    swagger.write_text(json.dumps({"swagger": "2.0"}))
    result = run(runner, "-i", swagger, "-o", tmp_path / "out")
    assert result.exit_code == 1
    assert "input document must use openapi format" in result.output


def test_undecodable_input(runner, tmp_path):
    path = tmp_path / "binary.yaml"
    path.write_bytes(b"openapi: 3.0.0\ninfo:\n  title: \xff\xfe\n")
    result = run(runner, "-i", path, "-o", tmp_path / "out")
    assert result.exit_code == 1
    assert "cannot parse" in result.output


def test_output_is_an_existing_file(runner, petstore, tmp_path):
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")
    result = run(runner, "-i", petstore, "-o", blocker)
    assert result.exit_code == 1
    assert "failed to save project" in result.output
    assert blocker.read_text() == "not a directory"


def test_missing_required_options(runner):
    result = runner.invoke(openapi_to_io_ts, ["generate"])
    assert result.exit_code != 0
    assert "--input" in result.output


def test_strict_fails_on_unsupported_schema(runner, tmp_path):
    path = tmp_path / "api.yaml"
    path.write_text(PETSTORE + "    Alias:\n      $ref: '#/components/schemas/Pet'\n")

    assert run(runner, "-i", path, "-o", tmp_path / "lenient").exit_code == 0

    result = run(runner, "-i", path, "-o", tmp_path / "strict", "--strict")
    assert result.exit_code == 1
    assert "#/components/schemas/Alias" in result.output
    assert not (tmp_path / "strict" / "file.ts").exists()


def test_config_file(runner, petstore, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"integer_codec": "t.number", "output_filename": "codecs.ts"}))

    result = run(runner, "-i", petstore, "-o", tmp_path / "out", "-c", config)

    assert result.exit_code == 0, result.output
    assert "age: t.number" in (tmp_path / "out" / "codecs.ts").read_text()


def test_invalid_config(runner, petstore, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"dangling_reference_policy": "drop"}))
    result = run(runner, "-i", petstore, "-o", tmp_path / "out", "-c", config)
    assert result.exit_code == 1
    assert "invalid config" in result.output


def test_error_mode_refuses_existing_output(runner, petstore, tmp_path):
    (tmp_path / "file.ts").write_text("keep me")
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"output": {"mode": "error"}}))

    result = run(runner, "-i", petstore, "-o", tmp_path, "-c", config)

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (tmp_path / "file.ts").read_text() == "keep me"
