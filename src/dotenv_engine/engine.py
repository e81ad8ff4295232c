"""
High level orchestration for loading a profile of dotenv files.
"""

from __future__ import annotations

from typing import List

from .config import LoaderConfig, ProfileConfig
from .loader import LoadReport, load_env_file
from .materializer import EnvironmentHandle, process_environment


class EnvLoader:
    """Loads every file of a profile, in order, into one environment."""

    def __init__(self, config: LoaderConfig, environment: EnvironmentHandle | None = None):
        self.config = config
        self.environment = environment if environment is not None else process_environment()

    def _load_profile(self, profile: ProfileConfig, override: bool, strict: bool) -> List[LoadReport]:
        reports: List[LoadReport] = []
        for source in profile.sources:
            report = load_env_file(
                source.path,
                override=override,
                strict=strict,
                environment=self.environment,
                encoding=self.config.encoding,
                required=source.required,
            )
            if report is not None:
                reports.append(report)
        return reports

    def run(
        self,
        profile: str | None = None,
        override: bool | None = None,
        strict: bool | None = None,
    ) -> List[LoadReport]:
        """
        Load the named profile (the configured default when omitted).

        ``override`` and ``strict`` replace the profile's own settings when given.
        Each file interpolates against the environment as the earlier files left it.
        """

        selected = self.config.profile(profile)
        if override is None:
            override = selected.override
        if strict is None:
            strict = selected.strict if selected.strict is not None else self.config.strict
        return self._load_profile(selected, override, strict)


__all__ = ["EnvLoader"]
