from __future__ import annotations

import base64
import json

import pytest
from typer.testing import CliRunner

from oketing import cli
from oketing.agents import flows
from oketing.agents import image as image_module

runner = CliRunner()


@pytest.fixture
def use_settings(settings, monkeypatch):
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    monkeypatch.setattr(cli, "_configure_logging", lambda verbose: None)


def test_generate_prints_pack(use_settings, responses, monkeypatch):
    gemini = responses.client(responses.text('{"xPosts":["Tweet 1"]}', total_tokens=7))
    monkeypatch.setattr(flows, "create_client", lambda _settings: gemini)

    result = runner.invoke(
        cli.app, ["generate", "--name", "Wireless Earbuds", "--description", "30h battery", "--id", "p1"]
    )

    assert result.exit_code == 0, result.output
    body = json.loads(result.output)
    assert body["tokens"] == 7
    assert body["pack"]["productId"] == "p1"
    assert body["pack"]["xPosts"] == ["Tweet 1"]


def test_more_prints_items(use_settings, responses, monkeypatch):
    gemini = responses.client(responses.text('["a","b"]'))
    monkeypatch.setattr(flows, "create_client", lambda _settings: gemini)

    result = runner.invoke(cli.app, ["more", "instagram", "--name", "Wireless Earbuds"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == ["a", "b"]


def test_more_reports_parse_errors(use_settings, responses, monkeypatch):
    gemini = responses.client(responses.text("nope"))
    monkeypatch.setattr(flows, "create_client", lambda _settings: gemini)

    result = runner.invoke(cli.app, ["more", "x", "--name", "Wireless Earbuds"])

    assert result.exit_code == 1


def test_enhance_writes_output_file(use_settings, responses, monkeypatch, tmp_path):
    source = tmp_path / "product.png"
    source.write_bytes(b"original")
    target = tmp_path / "out" / "enhanced.png"
    gemini = responses.client(responses.image(responses.image_part("image/png", b"better")))
    monkeypatch.setattr(image_module, "create_client", lambda _settings: gemini)

    result = runner.invoke(cli.app, ["enhance", str(source), "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_bytes() == b"better"
    part = gemini.aio.models.generate_content.await_args.kwargs["contents"][0]
    assert part.inline_data.data == b"original"


def test_enhance_prints_original_when_no_image(use_settings, responses, monkeypatch, tmp_path):
    source = tmp_path / "product.jpg"
    source.write_bytes(b"original")
    gemini = responses.client(responses.image(responses.text_part("sorry")))
    monkeypatch.setattr(image_module, "create_client", lambda _settings: gemini)

    result = runner.invoke(cli.app, ["enhance", str(source)])

    assert result.exit_code == 0, result.output
    expected = "data:image/jpeg;base64," + base64.b64encode(b"original").decode("ascii")
    assert result.output.strip() == expected


def test_enhance_rejects_non_image_file(use_settings, tmp_path):
    source = tmp_path / "notes.txt"
    source.write_text("hello", encoding="utf-8")

    result = runner.invoke(cli.app, ["enhance", str(source)])

    assert result.exit_code != 0


def test_transport_errors_exit_cleanly(use_settings, responses, monkeypatch):
    gemini = responses.client(side_effect=ConnectionError("connect failed"))
    monkeypatch.setattr(flows, "create_client", lambda _settings: gemini)

    result = runner.invoke(cli.app, ["generate", "--name", "Earbuds", "--description", "30h"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ConnectionError)
