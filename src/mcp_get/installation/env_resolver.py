"""Resolution of the environment variables a package needs.

Deciding what to do with each declared variable is a pure function of the
package metadata and an environment snapshot (``plan_env_actions``). The
``EnvironmentResolver`` walks that plan and asks the user through a
``Prompter``, so the decision logic can be tested without a terminal.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import structlog

from ..catalog import EnvVarRequirement, Package
from ..prompts import Prompter

logger = structlog.get_logger(__name__)


class EnvAction(Enum):
    """What to do with one declared variable."""

    AUTO_REUSE = "auto_reuse"
    PROMPT_REUSE = "prompt_reuse"
    PROMPT_ENTRY = "prompt_entry"
    SKIP = "skip"


def decide_action(
    live_value: Optional[str], required: bool, auto_setup: bool
) -> EnvAction:
    """Map one variable's inputs to an action.

    ``auto_setup`` is True when the user accepted the detected values as a
    whole. Auto setup is only offered when no required variable is missing,
    so a required variable without a live value still falls back to entry.
    """
    if auto_setup:
        if live_value:
            return EnvAction.AUTO_REUSE
        return EnvAction.PROMPT_ENTRY if required else EnvAction.SKIP
    if live_value:
        return EnvAction.PROMPT_REUSE
    return EnvAction.PROMPT_ENTRY


@dataclass
class EnvVarPlan:
    """Declared variable together with what the environment holds for it."""

    name: str
    requirement: EnvVarRequirement
    live_value: Optional[str] = None

    def action(self, auto_setup: bool) -> EnvAction:
        return decide_action(self.live_value, self.requirement.required, auto_setup)


@dataclass
class EnvPlan:
    """Snapshot of a package's declared variables against the environment."""

    variables: List[EnvVarPlan] = field(default_factory=list)
    missing_required: bool = False

    @property
    def detected(self) -> Dict[str, str]:
        """Variables that already have a value in the environment."""
        return {
            var.name: var.live_value for var in self.variables if var.live_value
        }

    @property
    def can_auto_setup(self) -> bool:
        return not self.missing_required and bool(self.detected)


def plan_env_actions(
    declared: Mapping[str, EnvVarRequirement], environ: Mapping[str, str]
) -> EnvPlan:
    """Partition declared variables into detected and missing ones."""
    plan = EnvPlan()
    for name, requirement in declared.items():
        live_value = environ.get(name) or None
        if live_value is None and requirement.required:
            plan.missing_required = True
        plan.variables.append(EnvVarPlan(name, requirement, live_value))
    return plan


class EnvironmentResolver:
    """Decides which environment variables to store for a package."""

    def __init__(
        self,
        prompter: Prompter,
        config_path: Path,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.prompter = prompter
        self.config_path = config_path
        self.environ = environ

    def resolve(self, package: Package) -> Optional[Dict[str, str]]:
        """Collect values for the package's declared variables.

        Returns:
            The accepted variables, or None when nothing should be stored
        """
        if not package.required_env_vars:
            return None

        environ = self.environ if self.environ is not None else dict(os.environ)
        plan = plan_env_actions(package.required_env_vars, environ)

        if plan.can_auto_setup:
            use_auto_setup = self.prompter.confirm(
                "Found all required environment variables. "
                "Would you like to use them automatically?",
                default=True,
            )
            if use_auto_setup:
                env_vars = {
                    var.name: var.live_value
                    for var in plan.variables
                    if var.action(auto_setup=True) is EnvAction.AUTO_REUSE
                }
                logger.info(
                    "Using environment variables from environment",
                    package=package.name,
                    env_vars=sorted(env_vars),
                )
                return env_vars

        if plan.missing_required:
            message = (
                "Some required environment variables are missing. "
                "Would you like to configure them now?"
            )
        else:
            message = (
                "Would you like to manually configure environment variables "
                "for this package?"
            )

        if not self.prompter.confirm(message, default=plan.missing_required):
            if plan.missing_required:
                self._print_guidance(
                    "Note: Some required environment variables are not configured."
                )
            return None

        env_vars = {}
        for var in plan.variables:
            value = self._resolve_variable(var)
            if value is not None:
                env_vars[var.name] = value

        if not env_vars:
            self._print_guidance("No environment variables were configured.")
            return None

        logger.info(
            "Environment variables configured",
            package=package.name,
            env_vars=sorted(env_vars),
        )
        return env_vars

    def _resolve_variable(self, var: EnvVarPlan) -> Optional[str]:
        if var.action(auto_setup=False) is EnvAction.PROMPT_REUSE:
            reuse = self.prompter.confirm(
                f"Found {var.name} in your environment variables. "
                "Would you like to use it?",
                default=True,
            )
            if reuse:
                return var.live_value

        return self.prompter.ask_text(
            f"Please enter {var.requirement.description}",
            name=var.name,
            required=var.requirement.required,
        )

    def _print_guidance(self, headline: str) -> None:
        self.prompter.echo(f"\n{headline}")
        self.prompter.echo("You can set them later by editing the config file at:")
        self.prompter.echo(str(self.config_path))
