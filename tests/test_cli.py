"""Tests for the command line front end."""

from unittest import mock

import pytest

from sonosremote import actions, cli
from sonosremote.exceptions import DeviceFault, SonosTransportError
from sonosremote.parsers import PlaybackStatus, QueueItem

IP_ADDR = "192.168.1.101"


@pytest.fixture()
def speaker():
    """Patch the Speaker class used by the cli, and return its instance."""
    with mock.patch("sonosremote.cli.Speaker") as speaker_class:
        yield speaker_class.return_value


def test_info(speaker, capsys):
    speaker.get_info.return_value = "UID: RINCON_1\nIP: " + IP_ADDR
    assert cli.main(["info", IP_ADDR]) == 0
    assert capsys.readouterr().out == "UID: RINCON_1\nIP: 192.168.1.101\n"


def test_timeout_is_passed_on():
    with mock.patch("sonosremote.cli.Speaker") as speaker_class:
        cli.main(["--timeout", "4", "info", IP_ADDR])
    speaker_class.assert_called_once_with(IP_ADDR, timeout=4.0)


@pytest.mark.parametrize(
    "command, argument, action, output",
    [
        ("play", None, actions.Play(), "Playing current track"),
        ("pause", None, actions.Pause(), "Pausing current track"),
        ("seek", "0:01:00", actions.Seek("0:01:00"), "Moving to position 0:01:00"),
        ("setvolume", "30", actions.SetVolume(30), "Setting volume to 30"),
        ("next", None, actions.Next(), "Moving to next track"),
        ("clearqueue", None, actions.ClearQueue(), "Cleared queue"),
        (
            "addtoqueue",
            "x-file-cifs://a.mp3",
            actions.AddToQueue("x-file-cifs://a.mp3"),
            "Added x-file-cifs://a.mp3 to queue",
        ),
    ],
)
def test_action_commands(speaker, capsys, command, argument, action, output):
    argv = ["run", IP_ADDR, command] + ([argument] if argument else [])
    assert cli.main(argv) == 0
    speaker.execute.assert_called_once_with(action)
    assert capsys.readouterr().out == output + "\n"


def test_missing_argument(speaker, capsys):
    assert cli.main(["run", IP_ADDR, "setvolume"]) == 1
    assert not speaker.execute.called
    assert capsys.readouterr().err == "Error: must provide a volume\n"


def test_invalid_volume(speaker, capsys):
    assert cli.main(["run", IP_ADDR, "setvolume", "loud"]) == 1
    assert not speaker.execute.called
    assert capsys.readouterr().err.startswith("Error: Error parsing volume")


def test_unknown_command(speaker):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run", IP_ADDR, "dance"])
    assert excinfo.value.code == 2


def test_getvolume(speaker, capsys):
    speaker.get_volume.return_value = 25
    assert cli.main(["run", IP_ADDR, "getvolume"]) == 0
    assert capsys.readouterr().out == "Current volume: 25\n"


def test_status(speaker, capsys):
    speaker.get_transport_info.return_value = PlaybackStatus("PLAYING", "OK")
    assert cli.main(["run", IP_ADDR, "status"]) == 0
    assert capsys.readouterr().out == "Current status:\nOK: PLAYING\n"


def test_queue(speaker):
    speaker.get_queue.return_value = [
        QueueItem("x-file-cifs://a.mp3", "0:03:00", "A", "B"),
        QueueItem("x-file-cifs://c.mp3", None, "C", "D"),
    ]
    assert cli.run_command(speaker, "queue") == (
        "Queue:"
        "\n-----\n1: A by B\nURI: x-file-cifs://a.mp3\nDuration: 0:03:00"
        "\n-----\n2: C by D\nURI: x-file-cifs://c.mp3\nDuration: N/A"
    )
    speaker.get_queue.return_value = []
    assert cli.run_command(speaker, "queue") == "No tracks found in queue"


@pytest.mark.parametrize("result", ["Success", None, ""])
def test_enterqueue(speaker, result):
    speaker.enter_queue.return_value = result
    assert cli.run_command(speaker, "enterqueue") == "Playing from queue"
    speaker.enter_queue.assert_called_once_with()


def test_device_fault_exit_code(speaker, capsys):
    speaker.execute.side_effect = DeviceFault(
        "Speaker responded with 500\ndevice error code 701",
        error_code="701",
        error_xml="",
        status_code=500,
        action="Seek",
    )
    assert cli.main(["run", IP_ADDR, "seek", "0:00:10"]) == 1
    assert capsys.readouterr().err == (
        "Error: Speaker responded with 500\ndevice error code 701\n"
    )


def test_connection_failure(capsys):
    with mock.patch(
        "sonosremote.cli.Speaker", side_effect=SonosTransportError("unreachable")
    ):
        assert cli.main(["info", IP_ADDR]) == 1
    assert capsys.readouterr().err == "Error: unreachable\n"


def test_change_volume(speaker, capsys):
    with mock.patch(
        "sonosremote.cli.gradually_change_volume", return_value=[20, 10, 0]
    ) as ramp:
        assert cli.main(["change-volume", IP_ADDR, "60", "-10"]) == 0
    ramp.assert_called_once_with(speaker, 60.0, -10)
    assert capsys.readouterr().out == (
        "Changing volume by -10 every 60.0 seconds\nFinal volume: 0\n"
    )
