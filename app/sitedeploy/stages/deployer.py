"""Provider deployer.

Detects the hosting provider from the marker file in the project root
and runs its deploy command. A failed deploy halts the pipeline.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from sitedeploy.core.config import PipelineConfig
from sitedeploy.core.runner import CommandRunner
from sitedeploy.models.command import CommandSpec
from sitedeploy.models.stage import StageName, StageResult
from sitedeploy.stages.base import Stage
from sitedeploy.utils.formatting import print_info, print_warning

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Provider:
    """A deployment target and how to reach it.

    Attributes:
        name: Short provider identifier.
        marker: File whose presence in the project root selects the provider.
        args: Deploy command and arguments.
    """

    name: str
    marker: str
    args: tuple[str, ...]


# Detection order: the first provider whose marker exists wins.
# The first entry doubles as the fallback when no marker is present.
PROVIDERS: tuple[Provider, ...] = (
    Provider(name="vercel", marker="vercel.json", args=("vercel", "--prod")),
    Provider(name="netlify", marker="netlify.toml", args=("netlify", "deploy", "--prod")),
    Provider(name="firebase", marker="firebase.json", args=("firebase", "deploy")),
    Provider(name="wix", marker="wix.config.js", args=("wix", "sites", "publish")),
)

DEFAULT_PROVIDER = PROVIDERS[0]


def get_provider(name: str) -> Provider | None:
    """Look up a provider by name (case-insensitive)."""
    for provider in PROVIDERS:
        if provider.name == name.lower():
            return provider
    return None


def detect_provider(project_dir: Path) -> Provider | None:
    """Return the highest-priority provider whose marker file exists.

    Args:
        project_dir: Root directory of the site project.

    Returns:
        Matching Provider, or None if no marker is present.
    """
    for provider in PROVIDERS:
        if (project_dir / provider.marker).exists():
            return provider
    return None


class Deployer(Stage):
    """Runs the deploy command of the detected or requested provider."""

    def __init__(
        self,
        project_dir: Path,
        config: PipelineConfig,
        runner: CommandRunner,
        provider: str | None = None,
    ) -> None:
        """Initialize the deployer.

        Args:
            project_dir: Root directory of the site project.
            config: Pipeline configuration.
            runner: Command runner used for the deploy command.
            provider: Provider name overriding marker detection.

        Raises:
            ValueError: If provider names no known provider.
        """
        super().__init__(project_dir, config, runner)
        self._override: Provider | None = None
        if provider is not None:
            self._override = get_provider(provider)
            if self._override is None:
                known = ", ".join(p.name for p in PROVIDERS)
                msg = f"Unknown provider '{provider}' (expected one of: {known})"
                raise ValueError(msg)

    @property
    def name(self) -> StageName:
        """Return DEPLOY as the stage name."""
        return StageName.DEPLOY

    @property
    def title(self) -> str:
        """Return the deploy heading."""
        return "Deploying the project"

    def select_provider(self) -> Provider:
        """Pick the provider to deploy with.

        Order: explicit override, then marker detection, then the default
        provider with a warning.
        """
        if self._override is not None:
            return self._override

        detected = detect_provider(self._project_dir)
        if detected is not None:
            logger.debug("Detected %s from %s", detected.name, detected.marker)
            return detected

        print_warning(
            "No deployment configuration detected. "
            f"Defaulting to {' '.join(DEFAULT_PROVIDER.args)}."
        )
        return DEFAULT_PROVIDER

    def run(self) -> StageResult:
        """Run the selected provider's deploy command."""
        provider = self.select_provider()
        print_info(f"Deploying with {provider.name}")
        spec = CommandSpec(
            args=provider.args,
            label="Deployment failed",
            cwd=self._project_dir,
            fatal=True,
        )
        if self._runner.execute(spec):
            return StageResult(stage=self.name, success=True, message=provider.name)
        return StageResult(stage=self.name, success=False, message=spec.label)
