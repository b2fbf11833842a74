from __future__ import annotations

import argparse
import asyncio
from typing import List, Optional

from .core.config import InitOptions, settings
from .core.i18n import LocalizeAndTranslate
from .core.locale import Locale
from .core.logging_config import get_logger, setup_logging

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="localize",
        description="Load translations into local storage and look keys up.",
    )
    p.add_argument("keys", nargs="*", help="Translation keys to print")
    p.add_argument("--locale", help="Switch the active locale first, e.g. 'ar' or 'fr-CA'")
    p.add_argument("--list-keys", action="store_true", help="Print every stored translation key")
    p.add_argument("--debug", action="store_true", default=settings.DEBUG)
    return p


def parse_locale(value: str) -> Locale:
    lang, _, country = value.replace("_", "-").partition("-")
    return Locale(lang, country or None)


async def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_file=settings.LOG_FILE, debug=args.debug, config_path=settings.LOG_CONFIG or None)

    async with LocalizeAndTranslate() as i18n:
        await i18n.init(InitOptions.from_settings())
        if args.locale:
            await i18n.set_locale(parse_locale(args.locale))

        locale = await i18n.get_locale()
        rtl = await i18n.is_right_to_left()
        print(f"locale={locale} rtl={'true' if rtl else 'false'}")
        if args.list_keys:
            for key in await i18n.get_stored_keys():
                print(key)
        for key in args.keys:
            print(f"{key}={await i18n.translate(key)}")
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
