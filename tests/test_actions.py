"""Tests for the actions module."""

import pytest

from sonosremote import actions
from sonosremote.exceptions import InputValidationError
from sonosremote.parsers import PlaybackStatus
from sonosremote.services import AV_TRANSPORT, CONTENT_DIRECTORY, RENDERING_CONTROL


@pytest.mark.parametrize("volume", range(0, 101))
def test_set_volume_in_range(volume):
    action = actions.SetVolume(volume)
    assert action.arguments()[-1] == ("DesiredVolume", str(volume))


@pytest.mark.parametrize("volume", [101, 255, -1, "101", "abc", "", "5.5", 5.5, None, True])
def test_set_volume_rejected(volume):
    with pytest.raises(InputValidationError):
        actions.SetVolume(volume)


def test_set_volume_accepts_numeric_strings():
    assert actions.SetVolume("42").volume == 42
    assert actions.SetVolume(" 7 ").volume == 7


def test_input_validation_error_is_value_error():
    with pytest.raises(ValueError):
        actions.SetVolume(1000)


def test_default_arguments():
    for action in (
        actions.Pause(),
        actions.GetCurrentTrack(),
        actions.GetStatus(),
        actions.Next(),
        actions.Previous(),
        actions.ClearQueue(),
        actions.EndControlSession(),
    ):
        assert action.arguments() == [("InstanceID", "0")]
        assert action.service is AV_TRANSPORT


def test_argument_order():
    assert actions.Play().arguments() == [("InstanceID", "0"), ("Speed", "1")]
    assert actions.SetVolume(30).arguments() == [
        ("InstanceID", "0"),
        ("Channel", "Master"),
        ("DesiredVolume", "30"),
    ]
    assert actions.Seek("0:01:30").arguments() == [
        ("InstanceID", "0"),
        ("Unit", "REL_TIME"),
        ("Target", "0:01:30"),
    ]
    assert actions.SetURI("x-rincon-mp3radio://a").arguments() == [
        ("InstanceID", "0"),
        ("CurrentURI", "x-rincon-mp3radio://a"),
        ("CurrentURIMetaData", ""),
    ]
    assert actions.AddToQueue("x-file-cifs://a.mp3").arguments() == [
        ("InstanceID", "0"),
        ("EnqueuedURI", "x-file-cifs://a.mp3"),
        ("EnqueuedURIMetaData", ""),
        ("DesiredFirstTrackNumberEnqueued", "0"),
        ("EnqueueAsNext", "0"),
    ]


def test_get_queue_arguments():
    action = actions.GetQueue()
    assert action.service is CONTENT_DIRECTORY
    assert action.name == "Browse"
    assert action.arguments() == [
        ("ObjectID", "Q:0"),
        ("BrowseFlag", "BrowseDirectChildren"),
        ("Filter", "*"),
        ("StartingIndex", "0"),
        ("RequestedCount", "100"),
        ("SortCriteria", ""),
    ]


def test_volume_actions_use_rendering_control():
    assert actions.GetVolume().service is RENDERING_CONTROL
    assert actions.SetVolume(1).service is RENDERING_CONTROL


@pytest.mark.parametrize("target", ["0:01:30", "12:00:00"])
def test_seek_valid(target):
    assert actions.Seek(target).target == target


@pytest.mark.parametrize("target", ["1:30", "abc", "0:1:30", "", None])
def test_seek_invalid(target):
    with pytest.raises(InputValidationError):
        actions.Seek(target)


def test_action_names():
    assert {name: cls.name for name, cls in actions.ACTIONS.items()} == {
        name: name for name in actions.ACTIONS
    }
    assert sorted(actions.ACTIONS) == [
        "AddURIToQueue",
        "Browse",
        "EndDirectControlSession",
        "GetPositionInfo",
        "GetTransportInfo",
        "GetVolume",
        "Next",
        "Pause",
        "Play",
        "Previous",
        "RemoveAllTracksFromQueue",
        "Seek",
        "SetAVTransportURI",
        "SetVolume",
    ]


def test_default_on_success():
    assert actions.Play().on_success("<ignored/>") == actions.SUCCESS == "Success"


def test_on_success_with_payload(responses):
    assert actions.GetVolume().on_success(responses.load_xml("get_volume.xml")) == 25
    assert actions.GetStatus().on_success(
        responses.load_xml("transport_info.xml")
    ) == PlaybackStatus("PAUSED_PLAYBACK", "OK")
    assert len(actions.GetQueue().on_success(responses.load_xml("browse_queue.xml"))) == 3


def test_error_hints():
    assert "not currently playing" in actions.Play().on_device_error("701")
    assert "is currently playing" in actions.Pause().on_device_error("701")
    assert "next track" in actions.Next().on_device_error("711")
    assert "previous track" in actions.Previous().on_device_error("711")
    assert actions.Play().on_device_error("711") is None
    assert actions.Seek("0:00:01").on_device_error("701") is None


def test_equality():
    assert actions.SetVolume(5) == actions.SetVolume("5")
    assert actions.SetVolume(5) != actions.SetVolume(6)
    assert actions.Next() != actions.Previous()
    assert len({actions.Play(), actions.Play()}) == 1


@pytest.mark.parametrize("volume", ["1_0", "0x10", "+5", "٣", "10\n1"])
def test_set_volume_only_plain_digits(volume):
    with pytest.raises(InputValidationError):
        actions.SetVolume(volume)


@pytest.mark.parametrize("target", ["0:01:30\n", "0:01:30\n0"])
def test_seek_rejects_trailing_newline(target):
    with pytest.raises(InputValidationError):
        actions.Seek(target)
