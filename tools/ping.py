# tools/ping.py
# Usage examples:
#   python3 -m tools.ping example.com
#   python3 -m tools.ping example.com -p 22 -c 5
#   python3 -m tools.ping 10.0.0.1 -p 80 -c 20 -i 0.2 -t 1 --skip 2 --verbose
#   python3 -m tools.ping example.com --json
#   python3 -m tools.ping fake -c 5        (scripted prober, no network)

import argparse
import sys

from tcpping.brain.cancel import CancellationToken, install_signal_handlers, restore_signal_handlers
from tcpping.brain.controller import ProbeScheduler
from tcpping.config import (DEFAULT_INTERVAL_S, DEFAULT_PORT, DEFAULT_TIMEOUT_S, VERSION,
                            DisplayMode, ScheduleConfig)
from tcpping.errors import ConfigError, ResolutionError, SocketCreationError
from tcpping.logs import setup_logging
from tcpping.render import TextRenderer
from tcpping.resolve import resolve

EXIT_OK = 0
EXIT_RESOLVE = 1
EXIT_USAGE = 2
EXIT_LOCAL_ERROR = 3


def display_mode(args) -> DisplayMode:
    if args.json:
        return DisplayMode.JSON
    if args.quiet:
        return DisplayMode.QUIET
    if args.verbose:
        return DisplayMode.VERBOSE
    return DisplayMode.NORMAL


def build_prober(args):
    if args.target == "fake":
        from tcpping.prober.fake import FakeProber
        return FakeProber(script=[7.738, 7.942, 8.488, 7.794, 7.828])
    from tcpping.prober.tcp import TcpProber
    return TcpProber()


def build_config(args, ip: str) -> ScheduleConfig:
    return ScheduleConfig(
        target_ip=ip,
        target_port=args.port,
        hostname=args.target,
        probe_count=args.count,
        interval_seconds=args.interval,
        timeout_seconds=args.timeout,
        skip_count=args.skip,
        display_mode=display_mode(args),
        reset_jitter_on_failure=args.reset_jitter_on_failure,
    ).validate()


def build_argparser():
    ap = argparse.ArgumentParser(prog="tcpping", description="Measure latency with TCP handshakes")
    ap.add_argument("target", help="Destination host/IP (or 'fake' to use FakeProber)")
    ap.add_argument("-p", "--port", type=int, default=DEFAULT_PORT, help="TCP port number")
    ap.add_argument("-c", "--count", type=int, default=0, help="Number of probes (0 = until interrupted)")
    ap.add_argument("-i", "--interval", type=float, default=DEFAULT_INTERVAL_S,
                    help="Seconds to wait between probes")
    ap.add_argument("-t", "--timeout", type=float, default=DEFAULT_TIMEOUT_S,
                    help="Seconds to wait for the handshake to complete")
    ap.add_argument("-s", "--skip", type=int, default=0,
                    help="Leading probes left out of the statistics (warm-up)")
    ap.add_argument("--reset-jitter-on-failure", action="store_true",
                    help="Do not compare RTTs across a failed probe when computing jitter")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("-q", "--quiet", action="store_true", help="Only print the summary")
    mode.add_argument("-V", "--verbose", action="store_true", help="Print running statistics per probe")
    mode.add_argument("--json", action="store_true", help="Emit JSON lines instead of text")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Diagnostics level (stderr)")
    ap.add_argument("-v", "--version", action="version", version=f"tcpping {VERSION}")
    return ap


def main(argv=None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    try:
        ip = "127.0.0.1" if args.target == "fake" else resolve(args.target)
    except ResolutionError as e:
        print(f"tcpping: {e}", file=sys.stderr)
        return EXIT_RESOLVE

    try:
        cfg = build_config(args, ip)
    except ConfigError as e:
        ap.print_usage(sys.stderr)
        print(f"tcpping: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    with CancellationToken() as token:
        previous = install_signal_handlers(token)
        try:
            scheduler = ProbeScheduler(
                build_prober(args),
                cfg,
                renderer=TextRenderer(sys.stdout, cfg.display_mode),
                cancel=token,
            )
            scheduler.run()
        except SocketCreationError as e:
            print(f"tcpping: {e}", file=sys.stderr)
            return EXIT_LOCAL_ERROR
        finally:
            restore_signal_handlers(previous)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
