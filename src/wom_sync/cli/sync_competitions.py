"""Mirror clan competitions from Wise Old Man into the local config store."""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Sequence

from wom_sync.classes.competition_finder import CompetitionFinder
from wom_sync.classes.config_store import ConfigStore
from wom_sync.classes.config_updater import ConfigUpdater
from wom_sync.classes.wiseoldman import WiseOldMan
from wom_sync.config import Settings, load_settings
from wom_sync.logging import configure_logging
from wom_sync.services.competition_scheduler import CompetitionScheduler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wom-sync")
    parser.add_argument("--once", action="store_true", help="Run a single sync cycle and exit")
    parser.add_argument("--config", help="Path to a config.yaml (defaults to the repo root one)")
    parser.add_argument("--db", help="Path to the config store database")
    parser.add_argument("--period-minutes", type=float, help="Minutes between sync cycles")
    parser.add_argument("--hunt-id", type=int, help="Default Wise Old Man competition id for The Hunt")
    parser.add_argument("-q", "--quiet", action="store_true", help="Decrease verbosity")
    return parser


def apply_arguments(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.db:
        settings.store_path = args.db
    if args.period_minutes is not None:
        if args.period_minutes <= 0:
            raise ValueError("--period-minutes must be positive")
        settings.period_seconds = args.period_minutes * 60
    if args.hunt_id is not None:
        settings.hunt_competition_id = args.hunt_id
    return settings


def build_scheduler(settings: Settings, store: ConfigStore) -> CompetitionScheduler:
    client = WiseOldMan(
        settings.group_id,
        api_base_url=settings.api_base_url,
        site_base_url=settings.site_base_url,
        timeout=settings.timeout,
    )
    return CompetitionScheduler(
        client,
        CompetitionFinder(client),
        ConfigUpdater(store),
        period_seconds=settings.period_seconds,
        initial_delay_seconds=settings.initial_delay_seconds,
        stop_grace_seconds=settings.stop_grace_seconds,
        hunt_competition_id=settings.hunt_competition_id,
    )


def run_forever(scheduler: CompetitionScheduler, stopped: threading.Event | None = None) -> None:
    stopped = stopped or threading.Event()

    def _request_stop(signum, _frame):
        logger.info("received signal %d, stopping", signum)
        stopped.set()

    signal.signal(signal.SIGTERM, _request_stop)
    scheduler.start()
    try:
        while not stopped.wait(1.0):
            pass
    except KeyboardInterrupt:
        logger.info("interrupted, stopping")
    finally:
        scheduler.stop()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else sys.argv[1:])
    configure_logging()
    if args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    settings = apply_arguments(load_settings(Path(args.config) if args.config else None), args)
    store = ConfigStore(settings.store_path)
    try:
        scheduler = build_scheduler(settings, store)
        if args.once:
            scheduler.run_cycle()
        else:
            run_forever(scheduler)
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
