#!/usr/bin/env python3
"""autosave demo: change a couple of fields and watch settings.json follow"""

import argparse
import logging
import time

from .adapters.config_env import load_autosave_config
from .core.fields import BoolField, FieldChanged
from .settings import AutosavingSettings


class Settings(AutosavingSettings):
    """Two boolean flags persisted as FieldOne / FieldTwo"""

    field_one = BoolField(key="FieldOne")
    field_two = BoolField(key="FieldTwo")


def _console_logger(event: FieldChanged) -> None:
    print(f"✎ {event.name} changed")


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="autosave-demo", description=__doc__)
    parser.add_argument("--path", help="snapshot file (default: $AUTOSAVE_PATH or ./settings.json)")
    parser.add_argument("--ordered", action="store_true", help="serialize overlapping writes")
    parser.add_argument("--load", action="store_true", help="start from an existing snapshot")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    cfg = load_autosave_config()

    logging.basicConfig(
        level=logging.DEBUG if (args.debug or cfg.debug) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings(
        args.path,
        config=cfg,
        ordered=True if args.ordered else None,
        load=args.load,
    )
    settings.subscribe(_console_logger)

    print("\n" + "=" * 50)
    print("💾 autosave demo")
    print("=" * 50)
    print(f"Snapshot: {settings.path}")
    print(f"Writes: {'ordered' if settings.persistence.ordered else 'racy (last completion wins)'}")
    print("=" * 50 + "\n")

    # Unchanged value: no notification, no write
    settings.field_one = False
    time.sleep(0.1)

    settings.field_two = True
    time.sleep(0.1)

    if not settings.persistence.wait_idle(timeout=5.0):
        print("⚠ Some writes are still pending")

    print(settings.describe(), end="")
    print("✓ Done")


if __name__ == "__main__":
    main()
