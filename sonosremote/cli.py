"""Command line front end for sonosremote.

Examples::

    sonosremote info 192.168.1.101
    sonosremote run 192.168.1.101 setvolume 30
    sonosremote run 192.168.1.101 current
    sonosremote change-volume 192.168.1.101 60 -5
"""

import argparse
import logging
import sys

from . import actions
from .core import Speaker
from .exceptions import InputValidationError, SonosRemoteException
from .ramp import gradually_change_volume

_LOG = logging.getLogger(__name__)


def _required(arg, what):
    if arg is None:
        raise InputValidationError("must provide {}".format(what))
    return arg


def _enter_queue(speaker):
    speaker.enter_queue()
    return "Playing from queue"


def _show_queue(speaker):
    items = speaker.get_queue()
    if not items:
        return "No tracks found in queue"
    return "Queue:" + "".join(
        "\n-----\n{}: {}".format(index, item) for index, item in enumerate(items, 1)
    )


# Commands which send an action and print an acknowledgement. Each maps to
# a factory taking the optional command argument, and the message to print.
ACTION_COMMANDS = {
    "play": (lambda _: actions.Play(), "Playing current track"),
    "pause": (lambda _: actions.Pause(), "Pausing current track"),
    "seek": (
        lambda arg: actions.Seek(_required(arg, "a target time")),
        "Moving to position {}",
    ),
    "seturi": (
        lambda arg: actions.SetURI(_required(arg, "a URI")),
        "Playing from URI: {}",
    ),
    "setvolume": (
        lambda arg: actions.SetVolume(_required(arg, "a volume")),
        "Setting volume to {}",
    ),
    "next": (lambda _: actions.Next(), "Moving to next track"),
    "previous": (lambda _: actions.Previous(), "Moving to previous track"),
    "endcontrol": (
        lambda _: actions.EndControlSession(),
        "Ended control sessions of other services",
    ),
    "addtoqueue": (
        lambda arg: actions.AddToQueue(_required(arg, "a URI")),
        "Added {} to queue",
    ),
    "clearqueue": (lambda _: actions.ClearQueue(), "Cleared queue"),
}

# Commands which print something fetched from the speaker
QUERY_COMMANDS = {
    "current": lambda s: "Current track:\n{}".format(s.get_current_track_info()),
    "getvolume": lambda s: "Current volume: {}".format(s.get_volume()),
    "status": lambda s: "Current status:\n{}".format(s.get_transport_info()),
    "queue": _show_queue,
    "enterqueue": _enter_queue,
}

COMMANDS = sorted(list(ACTION_COMMANDS) + list(QUERY_COMMANDS))


def run_command(speaker, command, argument=None):
    """Run a named command against a speaker and return the text to print.

    Raises:
        KeyError: for an unknown command.
    """
    if command in QUERY_COMMANDS:
        return QUERY_COMMANDS[command](speaker)
    factory, message = ACTION_COMMANDS[command]
    speaker.execute(factory(argument))
    return message.format(argument)


def build_parser():
    """Return the argument parser for the ``sonosremote`` command."""
    parser = argparse.ArgumentParser(
        prog="sonosremote", description="Control a Sonos speaker."
    )
    parser.add_argument("--debug", action="store_true", help="log requests")
    parser.add_argument(
        "--timeout", type=float, default=None, help="request timeout in seconds"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="show information about a speaker")
    info.add_argument("ip_addr")

    ramp = subparsers.add_parser(
        "change-volume", help="change the volume in steps at a fixed interval"
    )
    ramp.add_argument("ip_addr")
    ramp.add_argument("interval_seconds", type=float)
    ramp.add_argument("volume_change", type=int)

    run = subparsers.add_parser("run", help="send a single command to a speaker")
    run.add_argument("ip_addr")
    run.add_argument("action", choices=COMMANDS)
    run.add_argument("argument", nargs="?")
    return parser


def main(argv=None):
    """Run the command line tool. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        speaker = Speaker(args.ip_addr, timeout=args.timeout)
        if args.command == "info":
            print(speaker.get_info())
        elif args.command == "change-volume":
            print(
                "Changing volume by {} every {} seconds".format(
                    args.volume_change, args.interval_seconds
                )
            )
            volumes = gradually_change_volume(
                speaker, args.interval_seconds, args.volume_change
            )
            print("Final volume: {}".format(volumes[-1] if volumes else "unchanged"))
        else:
            print(run_command(speaker, args.action, args.argument))
    except SonosRemoteException as error:
        _LOG.debug("Command failed", exc_info=True)
        print("Error: {}".format(error), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
