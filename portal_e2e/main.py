# main.py
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import clamp_signal_timeout, load_settings
from .constants import *
from .errors import ConfigurationError, PortalE2EError
from .profile import load_profile
from .scenarios import SCENARIOS
from .session import PortalSession


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='End-to-end login and product menu checks for a portal')
    parser.add_argument('--scenario', choices=[*SCENARIOS, 'all'], default='login', help='Scenario to run')
    parser.add_argument('--env-file', default=None, help='.env file with PORTAL_* settings')
    parser.add_argument('--profile', default=None, help='Selector profile YAML')
    parser.add_argument('--artifacts-dir', default=None, help='Directory for traces and screenshots')
    parser.add_argument('--signal-timeout', type=float, default=None, help='Seconds to wait for a logged-in signal')
    parser.add_argument('--headful', action='store_true', help='Show browser')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(asctime)s %(levelname)-5s %(message)s', datefmt='%Y-%m-%d %H:%M:%S')

    try:
        settings = load_settings(args.env_file)
        if args.artifacts_dir:
            settings.artifacts_dir = Path(args.artifacts_dir)
        if args.signal_timeout is not None:
            settings.signal_timeout = clamp_signal_timeout(args.signal_timeout)
        if args.headful:
            settings.headful = True
        profile = load_profile(args.profile or settings.profile_path)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    names = list(SCENARIOS) if args.scenario == 'all' else [args.scenario]
    try:
        async with PortalSession(settings, profile) as session:
            results = await session.run(names)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except PortalE2EError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    for name, result in results.items():
        logger.info(f"{name}: {result.outcome.value} at {result.final_url}"
                    f"{' (password rotated)' if result.rotated else ''}")
    return 0


def run():
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
