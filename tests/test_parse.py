from __future__ import annotations

from pathlib import Path

import pytest

from iconiic import parse
from iconiic.engine import ContainerKind, EntryOptions
from iconiic.errors import CommandSyntaxError, SyntaxKind


def syntax_error(tokens: list[str]) -> CommandSyntaxError:
    with pytest.raises(CommandSyntaxError) as excinfo:
        parse.args(tokens)
    return excinfo.value


@pytest.mark.parametrize(
    "tokens",
    [["-h"], ["--help"], ["-e", "a.png", "16", "-h"], ["-h", "-o"]],
)
def test_help_short_circuits(tokens):
    assert parse.args(tokens) == parse.Help()


def test_square_sizes_for_ico():
    command = parse.args(["-e", "a.png", "16", "32", "-o", "out.ico"])

    assert isinstance(command, parse.BuildIcon)
    assert command.kind is ContainerKind.ICO
    assert command.output_path == Path("out.ico")
    assert command.entries == {
        EntryOptions(16, 16): Path("a.png"),
        EntryOptions(32, 32): Path("a.png"),
    }


def test_flags_apply_to_the_current_group_only():
    command = parse.args(
        ["-e", "small.png", "16", "-e", "image.png", "32x12", "48", "-i", "-p", "-png", "output.zip"]
    )

    assert command.kind is ContainerKind.PNG_SEQUENCE
    assert command.entries == {
        EntryOptions(16, 16): Path("small.png"),
        EntryOptions(32, 12, True, True): Path("image.png"),
        EntryOptions(48, 48, True, True): Path("image.png"),
    }


def test_long_flags_and_icns_extension_case():
    command = parse.args(["-e", "a.png", "128", "--interpolate", "--proportional", "-o", "Out.ICNS"])

    assert command.kind is ContainerKind.ICNS
    assert list(command.entries) == [EntryOptions(128, 128, True, True)]


def test_same_size_with_different_options_is_left_to_the_container():
    command = parse.args(["-e", "a.png", "16", "-e", "b.png", "16", "-i", "-o", "out.ico"])

    assert len(command.entries) == 2


def test_output_without_entries_is_accepted():
    command = parse.args(["-png", "out.zip"])

    assert command.entries == {}


@pytest.mark.parametrize("tokens", [[], ["-e", "a.png", "16"], ["-e", "a.png", "16", "-i"]])
def test_missing_output_flag(tokens):
    assert syntax_error(tokens).kind is SyntaxKind.MISSING_OUTPUT_FLAG


@pytest.mark.parametrize("tokens", [["-o"], ["-png"], ["-e", "a.png", "16", "-o"]])
def test_missing_output_path(tokens):
    assert syntax_error(tokens).kind is SyntaxKind.MISSING_OUTPUT_PATH


@pytest.mark.parametrize(
    "tokens, token",
    [
        (["16", "-o", "out.ico"], "16"),
        (["-i", "-o", "out.ico"], "-i"),
        (["-e"], "-e"),
        (["-e", "a.png", "abc", "-o", "out.ico"], "abc"),
        (["-e", "a.png", "0", "-o", "out.ico"], "0"),
        (["-e", "a.png", "16x", "-o", "out.ico"], "16x"),
        (["-e", "a.png", "-o", "out.ico"], "-o"),
        (["-e", "a.png", "-e", "b.png", "16", "-o", "out.ico"], "-e"),
        (["-e", "a.png", "-i", "-o", "out.ico"], "-i"),
        (["-e", "a.png", "16", "-i", "32", "-o", "out.ico"], "32"),
        (["-e", "a.png", "16", "-p", "-p", "-o", "out.ico"], "-p"),
        (["-e", "a.png", "16", "-o", "out.ico", "extra"], "extra"),
        (["-e", "a.png", "16", "16", "-o", "out.ico"], "16"),
        (["-e", "a.png", "16", "-e", "b.png", "16x16", "-o", "out.ico"], "16x16"),
    ],
)
def test_unexpected_token(tokens, token):
    err = syntax_error(tokens)

    assert err.kind is SyntaxKind.UNEXPECTED_TOKEN
    assert err.value == token


@pytest.mark.parametrize("output, ext", [("out.png", "png"), ("out.zip", "zip"), ("out", "")])
def test_unsupported_output_type(output, ext):
    err = syntax_error(["-e", "a.png", "16", "-o", output])

    assert err.kind is SyntaxKind.UNSUPPORTED_OUTPUT_TYPE
    assert err.value == ext


def test_png_sequence_requires_zip():
    err = syntax_error(["-png", "out.ico"])

    assert err.kind is SyntaxKind.UNSUPPORTED_PNG_OUTPUT
    assert err.value == "ico"


def test_output_checked_before_trailing_tokens():
    err = syntax_error(["-o", "out.bmp", "extra"])

    assert err.kind is SyntaxKind.UNSUPPORTED_OUTPUT_TYPE


@pytest.mark.parametrize("token, size", [("16", (16, 16)), ("32x12", (32, 12)), ("64X28", (64, 28))])
def test_parse_size(token, size):
    assert parse.parse_size(token) == size


@pytest.mark.parametrize(
    "token", ["", "x16", "16x0", "-16", "1.5", "4294967296", "16\n", "\u0661\u0666", "16x\u0661\u0666"]
)
def test_parse_size_rejects(token):
    assert parse.parse_size(token) is None


@pytest.mark.parametrize("token", ["16\n", "\u0661\u0666"])
def test_non_ascii_or_padded_size_is_unexpected(token):
    err = syntax_error(["-e", "a.png", token, "-o", "out.ico"])

    assert err.kind is SyntaxKind.UNEXPECTED_TOKEN
    assert err.value == token
