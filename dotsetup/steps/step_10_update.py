from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.pkg import pm_run

logger = logging.getLogger(__name__)


class UpdateSystemStep:
    step_id = "update"
    title = "Updating and Upgrading System Packages"

    def run(self, ctx: SetupContext) -> None:
        profile = ctx.profile
        for template in (profile.update, profile.upgrade, profile.autoremove, profile.autoclean):
            pm_run(profile, template, non_interactive=ctx.non_interactive, dry_run=ctx.dry_run)
        logger.info("System packages updated (%s)", profile.manager)
