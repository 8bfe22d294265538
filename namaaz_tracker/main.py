import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from namaaz_tracker.core.app import TrackerApp

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_basic_logging():
    """Console logging until the config file has been read"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)


def _package_version() -> str:
    try:
        return version("namaaz-tracker")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='namaaz-tracker', description='Track daily prayers, points and streaks')
    parser.add_argument('--config',
                        help='Path to config file (default: ~/.namaaz_tracker/config.yaml)')
    parser.add_argument('--api', action='store_true',
                        help='Start the HTTP API even if api.enabled is false in the config')
    parser.add_argument('--version', action='version', version=f'%(prog)s {_package_version()}')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_basic_logging()
    app = TrackerApp(config_path=args.config, force_api=args.api)
    app.run()


if __name__ == "__main__":
    main()
