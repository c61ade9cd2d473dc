# SPDX-License-Identifier: MIT
"""Unit tests for the video job state machine and wait loop (simulated clock)."""

import pytest

from wip_grok.exceptions import MissingRequestIdError, UpstreamError, VideoGenerationFailed, VideoGenerationTimedOut
from wip_grok.tools.video import VideoJobState, classify_status, wait_for_video


def _statuses(json_response, *payloads):
    """side_effect yielding one GET response per payload."""
    return [json_response(p, method="GET") for p in payloads]


@pytest.mark.unit
class TestClassifyStatus:
    @pytest.mark.parametrize("status", ["completed", "succeeded", "COMPLETED", " succeeded "])
    def test_success(self, status):
        assert classify_status(status) is VideoJobState.SUCCEEDED

    def test_failure(self):
        assert classify_status("failed") is VideoJobState.FAILED

    @pytest.mark.parametrize("status", ["pending", "queued", "unknown", "rendering", ""])
    def test_everything_else_is_pending(self, status):
        assert classify_status(status) is VideoJobState.PENDING


@pytest.mark.unit
async def test_completes_after_two_intervals(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = _statuses(
        json_response,
        {"state": "pending"},
        {"state": "pending"},
        {"state": "completed", "video_url": "https://vidgen.x.ai/out.mp4", "duration": 5},
    )
    start = fake_clock.now

    result = await wait_for_video("req_1", client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)

    assert result == {"status": "completed", "url": "https://vidgen.x.ai/out.mp4", "duration": 5, "error": None}
    assert fake_clock.sleeps == [5.0, 5.0]
    assert fake_clock.now - start == 10.0
    assert mock_client.get.await_count == 3


@pytest.mark.unit
async def test_succeeded_is_terminal(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = _statuses(json_response, {"status": "queued"}, {"status": "succeeded", "url": "u"})

    result = await wait_for_video("req_1", client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)

    assert result["status"] == "succeeded"
    assert result["url"] == "u"
    assert fake_clock.sleeps == [5.0]


@pytest.mark.unit
async def test_failed_raises_with_vendor_error(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = _statuses(
        json_response,
        {"state": "pending"},
        {"state": "failed", "error": "Prompt rejected by moderation"},
    )

    with pytest.raises(VideoGenerationFailed, match="Prompt rejected by moderation") as exc_info:
        await wait_for_video("req_1", client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)

    assert exc_info.value.request_id == "req_1"
    assert exc_info.value.error == "Prompt rejected by moderation"
    assert mock_client.get.await_count == 2


@pytest.mark.unit
async def test_failed_without_error_text(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = _statuses(json_response, {"state": "failed"})

    with pytest.raises(VideoGenerationFailed, match="unknown error"):
        await wait_for_video("req_1", client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)


@pytest.mark.unit
async def test_times_out_and_stops_polling(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = lambda *a, **kw: json_response({"state": "pending"}, method="GET")
    start = fake_clock.now

    with pytest.raises(VideoGenerationTimedOut, match="timed out after 12s"):
        await wait_for_video(
            "req_1", interval=5.0, timeout=12.0, client=mock_client, clock=fake_clock, sleep=fake_clock.sleep
        )

    # Polls at t=0, 5, 10; the deadline is checked at t=15 and no further poll starts
    assert mock_client.get.await_count == 3
    assert fake_clock.now - start > 12.0


@pytest.mark.unit
async def test_unknown_status_keeps_polling_until_timeout(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = lambda *a, **kw: json_response({"state": "rendering"}, method="GET")

    with pytest.raises(VideoGenerationTimedOut):
        await wait_for_video(
            "req_1", interval=1.0, timeout=4.0, client=mock_client, clock=fake_clock, sleep=fake_clock.sleep
        )

    assert mock_client.get.await_count == 4
    assert fake_clock.sleeps == [1.0, 1.0, 1.0, 1.0]


@pytest.mark.unit
async def test_missing_status_field_treated_as_pending(mock_client, json_response, fake_clock):
    mock_client.get.side_effect = _statuses(json_response, {}, {"state": "completed"})

    result = await wait_for_video("req_1", client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)

    assert result["status"] == "completed"
    assert mock_client.get.await_count == 2


@pytest.mark.unit
async def test_zero_timeout_never_polls(mock_client, fake_clock):
    with pytest.raises(VideoGenerationTimedOut):
        await wait_for_video("req_1", timeout=0.0, client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)

    mock_client.get.assert_not_called()


@pytest.mark.unit
async def test_upstream_error_during_poll_propagates(mock_client, json_response, fake_clock, mocker):
    mocker.patch("wip_grok.tools.video.get_json", side_effect=UpstreamError("Not Found", status_code=404))

    with pytest.raises(UpstreamError, match="Not Found"):
        await wait_for_video("req_1", client=mock_client, clock=fake_clock, sleep=fake_clock.sleep)

    assert fake_clock.sleeps == []


@pytest.mark.unit
async def test_empty_request_id():
    with pytest.raises(MissingRequestIdError):
        await wait_for_video("")
