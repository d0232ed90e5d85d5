from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

DEBUG_ENV_VAR = "RECOGNITION_DEBUG"
_TRUTHY = re.compile(r"1|true|yes", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class InterpretConfig:
    """
    Interpretation engine parameters.

    Scoring thresholds are fixed module constants; only diagnostics are configurable.
    Debug output never changes the returned result.
    """

    debug: bool = False
    debug_top_n: int = 5  # title candidates surfaced when debug is on

    def validate(self) -> None:
        if self.debug_top_n < 1:
            raise ValueError("debug_top_n must be >= 1")

    def __post_init__(self) -> None:
        self.validate()

    @staticmethod
    def from_env(environ: Mapping[str, str]) -> "InterpretConfig":
        """
        Build a config from an explicitly passed environment mapping.

        Stage modules never read os.environ themselves; the CLI passes it in.
        """

        raw = environ.get(DEBUG_ENV_VAR, "") or ""
        return InterpretConfig(debug=bool(_TRUTHY.fullmatch(raw)))
