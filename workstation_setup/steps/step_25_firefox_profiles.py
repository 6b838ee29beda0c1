from __future__ import annotations

import logging
import re
from pathlib import Path

from ..config import FirefoxProfile
from ..context import SetupContext
from ..errors import CommandError, StepError
from ..lib.assets import copy_file, ensure_dir
from ..lib.net import download_file
from ..lib.pkg import snap_refresh
from ..logging_utils import success

logger = logging.getLogger(__name__)

FIREFOX_BIN = "/snap/bin/firefox"


def profile_desktop_entry(text: str, profile: str) -> str:
    """Point a stock Firefox .desktop launcher at one profile."""

    flag = f" -p {profile}"
    text = text.replace(f"{FIREFOX_BIN} -new-window", f"{FIREFOX_BIN} -new-window{flag}")
    text = text.replace(f"{FIREFOX_BIN} -private-window", f"{FIREFOX_BIN} -private-window{flag}")
    text = re.sub(
        rf"^(.*{re.escape(FIREFOX_BIN)}) %u$",
        lambda m: f"{m.group(1)}{flag} %u",
        text,
        flags=re.MULTILINE,
    )
    return text.replace("Name=Firefox Web Browser", f"Name={profile.capitalize()} Browser")


class FirefoxProfilesStep:
    step_id = "25_firefox_profiles"
    title = "Setting up Firefox profiles..."
    prerequisite = False

    def _profile_dir(self, ctx: SetupContext, name: str) -> Path:
        base = ctx.home / ctx.cfg.firefox_profiles_dir
        matches = sorted(p for p in base.glob(f"*.{name}") if p.is_dir()) if base.is_dir() else []
        if not matches:
            raise StepError(f"Firefox profile directory for {name} not found under {base}")
        return matches[0]

    def _user_js(self, ctx: SetupContext) -> Path:
        cached = ctx.temp_dir / "user.js"
        if not cached.is_file() and not ctx.dry_run:
            download_file(ctx.cfg.firefox_user_js_url, cached)
        return cached

    def _setup_profile(self, ctx: SetupContext, profile: FirefoxProfile) -> None:
        logger.info("Creating Firefox profile: %s", profile.name)
        try:
            ctx.run(["firefox", "-CreateProfile", profile.name])
        except CommandError as e:
            raise StepError(f"Failed to create Firefox profile: {profile.name}") from e

        if ctx.dry_run:
            return

        if profile.user_js:
            user_js = self._user_js(ctx)
            dest = self._profile_dir(ctx, profile.name) / "user.js"
            logger.info("Copying user.js file to Firefox profile directory for profile: %s", profile.name)
            copy_file(user_js, dest)

        stock = Path(ctx.cfg.firefox_desktop_file)
        if not stock.is_file():
            raise StepError(f"Firefox desktop file not found: {stock}")
        ensure_dir(ctx.applications_dir)
        launcher = ctx.applications_dir / f"firefox_{profile.name}.desktop"
        launcher.write_text(
            profile_desktop_entry(stock.read_text(encoding="utf-8"), profile.name),
            encoding="utf-8",
        )

    def run(self, ctx: SetupContext) -> None:
        profiles = ctx.cfg.firefox_profiles
        if not profiles:
            raise StepError("No profile names provided. Aborting Firefox profile creation.")

        logger.info("Updating Firefox...")
        try:
            snap_refresh(ctx, "firefox")
        except CommandError as e:
            logger.warning("Firefox snap refresh failed, continuing: %s", e)

        for profile in profiles:
            self._setup_profile(ctx, profile)

        success(logger, "Firefox profiles set up successfully")
