# SPDX-License-Identifier: MIT
"""Integration tests for the wip-grok command-line front end."""

import pytest

from wip_grok.cli import build_parser, main

SEARCH_RESPONSE = {
    "output": [{"type": "message", "content": [{"type": "output_text", "text": "It is sunny."}]}],
    "citations": [{"title": "Weather", "url": "https://weather.example"}],
}


@pytest.fixture
def cli_client(mocker, mock_client):
    """Route every operation's default client to the mock client."""
    for module in ("search", "image", "video"):
        mocker.patch(f"wip_grok.tools.{module}.get_client", return_value=mock_client)
    return mock_client


def _run(argv: list[str]) -> int:
    try:
        main(argv)
    except SystemExit as e:
        return int(e.code or 0)
    return 0


@pytest.mark.integration
def test_search_web_prints_answer_and_sources(cli_client, json_response, capsys):
    cli_client.post.return_value = json_response(SEARCH_RESPONSE)

    assert _run(["search-web", "weather today", "--domains=weather.example,noaa.gov"]) == 0

    out = capsys.readouterr().out
    assert "It is sunny." in out
    assert "Sources:\n  1. Weather - https://weather.example" in out
    tool = cli_client.post.call_args.kwargs["body"]["tools"][0]
    assert tool == {"type": "web_search", "allowed_domains": ["weather.example", "noaa.gov"]}


@pytest.mark.integration
def test_search_x_flags(cli_client, json_response):
    cli_client.post.return_value = json_response(SEARCH_RESPONSE)

    assert _run(["search-x", "launch", "--handles", "a,b", "--from", "2026-01-01", "--to=2026-02-20"]) == 0

    tool = cli_client.post.call_args.kwargs["body"]["tools"][0]
    assert tool == {"type": "x_search", "allowed_x_handles": ["a", "b"], "from_date": "2026-01-01", "to_date": "2026-02-20"}


@pytest.mark.integration
def test_conflicting_filters_exit_nonzero(cli_client, capsys):
    code = _run(["search-web", "q", "--domains", "a.com", "--exclude", "b.com"])

    assert code == 1
    assert "Error: Cannot use both allowed_domains and excluded_domains" in capsys.readouterr().err
    cli_client.post.assert_not_called()


@pytest.mark.integration
def test_imagine_prints_urls_and_revised_prompt(cli_client, json_response, capsys):
    cli_client.post.return_value = json_response(
        {"data": [{"url": "https://imgen.x.ai/1.jpg", "revised_prompt": "A fox"}, {"b64_json": "QUJD"}]}
    )

    assert _run(["imagine", "a fox", "--n", "2", "--aspect", "16:9"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["https://imgen.x.ai/1.jpg", "Revised prompt: A fox", "[base64 data]"]
    body = cli_client.post.call_args.kwargs["body"]
    assert body["n"] == 2
    assert body["aspect_ratio"] == "16:9"


@pytest.mark.integration
def test_imagine_invalid_count(cli_client, capsys):
    assert _run(["imagine", "a fox", "--n", "11"]) == 1
    assert "n must be 1-10" in capsys.readouterr().err


@pytest.mark.integration
def test_imagine_output_saves_each_image(cli_client, json_response, mocker, tmp_path, capsys):
    cli_client.post.return_value = json_response({"data": [{"url": "https://a/1.jpg"}, {"url": "https://a/2.jpg"}]})
    mock_download = mocker.patch(
        "wip_grok.cli.download_url",
        side_effect=lambda url, path: {"path": str(path), "size_bytes": 3, "dimensions": (64, 32), "format": "jpeg"},
    )

    assert _run(["imagine", "a fox", "--n", "2", "--output", str(tmp_path / "fox.jpg")]) == 0

    saved_paths = [c.args[1] for c in mock_download.call_args_list]
    assert saved_paths == [tmp_path / "fox-1.jpg", tmp_path / "fox-2.jpg"]
    assert "(64x32 jpeg)" in capsys.readouterr().out


@pytest.mark.integration
def test_imagine_malformed_b64_exits_with_error(cli_client, json_response, tmp_path, capsys):
    cli_client.post.return_value = json_response({"data": [{"b64_json": "abc"}]})

    assert _run(["imagine", "cat", "--format", "b64_json", "--output", str(tmp_path / "o.png")]) == 1

    assert "Error: API Error: Invalid base64 image data" in capsys.readouterr().err
    assert not (tmp_path / "o.png").exists()


@pytest.mark.integration
def test_edit_repeatable_image_flag(cli_client, json_response, sample_png, capsys):
    cli_client.post.return_value = json_response({"data": [{"url": "https://imgen.x.ai/e.jpg"}]})

    assert _run(["edit", "make it blue", "--image", str(sample_png), "--image", "https://example.com/b.jpg"]) == 0

    assert cli_client.post.call_args.kwargs["body"]["image"].startswith("data:image/png;base64,")
    assert "https://imgen.x.ai/e.jpg" in capsys.readouterr().out


@pytest.mark.integration
def test_edit_too_many_images(cli_client, capsys):
    argv = ["edit", "p"] + [arg for i in range(4) for arg in ("--image", f"https://e/{i}.jpg")]

    assert _run(argv) == 1
    assert "Maximum 3 source images" in capsys.readouterr().err


@pytest.mark.integration
def test_video_without_wait_prints_follow_up(cli_client, json_response, capsys):
    cli_client.post.return_value = json_response({"request_id": "req_9"})

    assert _run(["video", "a cat", "--duration", "10"]) == 0

    out = capsys.readouterr().out
    assert "Request ID: req_9" in out
    assert "wip-grok video-status req_9" in out
    assert cli_client.post.call_args.kwargs["body"]["duration"] == 10


@pytest.mark.integration
def test_video_output_waits_and_downloads(cli_client, json_response, mocker, tmp_path, capsys):
    cli_client.post.return_value = json_response({"request_id": "req_9"})
    mock_wait = mocker.patch(
        "wip_grok.tools.video.wait_for_video",
        return_value={"status": "completed", "url": "https://vidgen/a.mp4", "duration": 5, "error": None},
    )
    out_file = tmp_path / "cat.mp4"
    mock_download = mocker.patch(
        "wip_grok.cli.download_url",
        return_value={"path": str(out_file), "size_bytes": 10, "dimensions": None, "format": None},
    )

    assert _run(["video", "a cat", "--output", str(out_file), "--interval", "2", "--timeout", "60"]) == 0

    assert mock_wait.call_args.kwargs["interval"] == 2.0
    assert mock_wait.call_args.kwargs["timeout"] == 60.0
    mock_download.assert_called_once_with("https://vidgen/a.mp4", str(out_file), is_image=False)
    out = capsys.readouterr().out
    assert "Status: completed" in out
    assert f"Saved to {out_file}" in out


@pytest.mark.integration
def test_video_invalid_duration(cli_client, capsys):
    assert _run(["video", "a cat", "--duration", "20"]) == 1
    assert "duration must be 1-15" in capsys.readouterr().err


@pytest.mark.integration
def test_video_status_prints_json(cli_client, json_response, capsys):
    cli_client.get.return_value = json_response({"state": "pending"}, method="GET")

    assert _run(["video-status", "req_9"]) == 0

    assert '"status": "pending"' in capsys.readouterr().out


@pytest.mark.integration
def test_upstream_error_exit_code(cli_client, mocker, capsys):
    from wip_grok.exceptions import UpstreamError

    mocker.patch("wip_grok.tools.video.get_json", side_effect=UpstreamError("Not Found", status_code=404))

    assert _run(["video-status", "missing"]) == 1
    assert "Error: API Error: Not Found" in capsys.readouterr().err


@pytest.mark.integration
def test_missing_credential_exit_code(mocker, monkeypatch, capsys):
    monkeypatch.delenv("XAI_API_KEY")
    mocker.patch("wip_grok.cli.load_dotenv")
    mocker.patch("wip_grok.config.subprocess.run", side_effect=FileNotFoundError("op"))

    assert _run(["video-status", "req_9"]) == 1
    assert "XAI_API_KEY not found" in capsys.readouterr().err


@pytest.mark.integration
def test_validation_runs_before_credential_lookup(mocker, monkeypatch, capsys):
    monkeypatch.delenv("XAI_API_KEY")
    mocker.patch("wip_grok.cli.load_dotenv")
    mock_run = mocker.patch("wip_grok.config.subprocess.run")

    assert _run(["imagine", "cat", "--n", "0"]) == 1

    err = capsys.readouterr().err
    assert "Error: n must be 1-10 (got 0)" in err
    assert "XAI_API_KEY not found" not in err
    mock_run.assert_not_called()


@pytest.mark.integration
def test_no_command_shows_usage(capsys):
    assert _run([]) == 1
    assert "usage: wip-grok" in capsys.readouterr().err


@pytest.mark.unit
def test_parser_subcommands():
    parser = build_parser()
    args = parser.parse_args(["video", "p", "--resolution", "480p", "--wait"])

    assert args.command == "video"
    assert args.resolution == "480p"
    assert args.wait is True
    assert args.duration == 5

    with pytest.raises(SystemExit):
        parser.parse_args(["video", "p", "--resolution", "1080p"])
