"""Decoder configuration for pyairq."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyairq._constants import DEVICE_LABEL_PREFIX
from pyairq.exceptions import AirqConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class AirqConfig:
    """Decoder configuration.

    Parameters
    ----------
    device_label_prefix : str
        Prefix joined with the frame's numeric device id to form the
        record's ``device_id`` and the registry lookup key
        (e.g. ``"Device1"``).
    enforce_validation_flag : bool
        Re-assert inside the frame decoder that the device's
        ``validation_flag`` is set. The ingestion layer always checks it.
    log_frames : bool
        Emit redacted frame summaries at DEBUG level.
    """

    device_label_prefix: str = DEVICE_LABEL_PREFIX
    enforce_validation_flag: bool = True
    log_frames: bool = False

    def __post_init__(self) -> None:
        if not self.device_label_prefix:
            raise AirqConfigError("device_label_prefix must not be empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> AirqConfig:
        """Create configuration from ``AIRQ_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AirqConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        prefix = env.get("AIRQ_DEVICE_LABEL_PREFIX")
        if prefix is not None:
            config_kwargs["device_label_prefix"] = prefix

        if "enforce_validation_flag" not in overrides:
            config_kwargs["enforce_validation_flag"] = _env_bool(
                env.get("AIRQ_ENFORCE_VALIDATION_FLAG"),
                True,
            )

        if "log_frames" not in overrides:
            config_kwargs["log_frames"] = _env_bool(env.get("AIRQ_LOG_FRAMES"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
