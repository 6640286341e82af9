from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.pkg import pm_install

logger = logging.getLogger(__name__)


class InstallCoreToolsStep:
    step_id = "core"
    title = "Installing Core Packages & Tools"

    def run(self, ctx: SetupContext) -> None:
        packages = ctx.manifest.family_packages("core", ctx.profile.family)
        if not packages:
            logger.warning("No core packages listed for family %s", ctx.profile.family)
            return
        # Package managers skip what is already installed, so this is safe to repeat.
        pm_install(ctx.profile, packages, non_interactive=ctx.non_interactive, dry_run=ctx.dry_run)
        logger.info("Core tools installed: %s", ", ".join(packages))
