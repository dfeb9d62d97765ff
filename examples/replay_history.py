#!/usr/bin/env python3
"""Example: Rebuild the baseline from an episode log and watch new episodes.

The log is a CSV with a header and rows of
``datetime,seconds_off,seconds_on`` where datetime looks like
``2024-01-05 14.03.27``. Episodes listed after ``--live`` rows are
processed as if they had just been recorded, so notifications fire.

Usage:
    python replay_history.py history.csv [--config monitor.yaml] [--live N]
"""

import argparse
import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import List

from activity_alarm_engine import Engine, Episode, GlobalConfig, configure_logging
from activity_alarm_engine.models import EPISODE_ID_FORMAT

logger = logging.getLogger("replay_history")


def read_episodes(path: Path) -> List[Episode]:
    """Parse the episode log, skipping rows that do not parse."""
    episodes = []
    with open(path, newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        for row in reader:
            try:
                start = datetime.strptime(row[0], EPISODE_ID_FORMAT)
                episodes.append(Episode(start, int(row[1]), int(row[2])))
            except (IndexError, ValueError) as e:
                logger.warning(f"Skipping row {row!r}: {e}")
    return episodes


def on_notification(event):
    """Callback when activity is unusually high."""
    print(f"\n🔔 UNUSUAL ACTIVITY at {event.episode_identifier}\n")
    # Here you could:
    # - Play back the recording named after the identifier
    # - Send a push notification
    # - etc.


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("log", type=Path, help="CSV episode log")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--live", type=int, default=0, help="Treat the last N rows as live")
    args = parser.parse_args()

    config = GlobalConfig.load(args.config) if args.config else GlobalConfig()
    configure_logging(config.system)

    episodes = read_episodes(args.log)
    split = max(len(episodes) - args.live, 0)
    history, live = episodes[:split], episodes[split:]

    engine = Engine(config.monitor, on_notification=on_notification)
    engine.replay(history)

    for episode in live:
        outcome = engine.process_episode(episode)
        print(
            f"{episode.identifier}  level={outcome.activity_level:.4f}  "
            f"expected={outcome.expected_mean:.4f}±{outcome.expected_stdev:.4f}  "
            f"threshold={outcome.threshold:.4f}  {outcome.state.value}"
        )

    print("\nhour  weekday(n, mean, stdev)        weekend(n, mean, stdev)")
    for hour, weekday, weekend in engine.export_buckets():
        print(
            f"{hour:4d}  {weekday.count:5d} {weekday.mean:8.4f} {weekday.stdev:8.4f}"
            f"    {weekend.count:5d} {weekend.mean:8.4f} {weekend.stdev:8.4f}"
        )
    overall = engine.export_overall()
    print(f"overall {overall.count} episodes, mean={overall.mean:.4f}, stdev={overall.stdev:.4f}")


if __name__ == "__main__":
    main()
