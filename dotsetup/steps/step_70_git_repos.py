from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.git import clone_if_missing

logger = logging.getLogger(__name__)


class CloneGitReposStep:
    step_id = "git-repos"
    title = "Cloning Git Repositories for Tools"

    def run(self, ctx: SetupContext) -> None:
        for repo in ctx.manifest.entries("git_repos"):
            dest = ctx.settings.under_home(str(repo["dest"]))
            cloned = clone_if_missing(str(repo["url"]), dest, depth=repo.get("depth"), dry_run=ctx.dry_run)
            if not cloned:
                logger.info("%s directory already exists, skipping clone", repo.get("name") or dest)
