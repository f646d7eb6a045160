"""Host-facing update loop driving the deriver and the display policy."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Mapping, Optional

from kfd_core.derivation import TelemetryDeriver
from kfd_core.display import DisplayPolicy, RenderCommand, TimeUnits, ViewContext
from kfd_core.interfaces import AerodynamicsProvider, RenderSink
from kfd_core.snapshot import VesselSnapshot
from kfd_core.thresholds import DEFAULT_THRESHOLDS, WarningThresholds

from .settings import DisplaySettings, SettingsError, load_settings, save_settings

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_UPDATE_INTERVAL", "FlightDataController", "should_display"]

DEFAULT_UPDATE_INTERVAL = 0.1


def should_display(snapshot: Optional[VesselSnapshot]) -> bool:
    """Whether the HUD belongs on screen for ``snapshot``."""

    if snapshot is None:
        return False
    return not snapshot.is_eva and not snapshot.is_dead and snapshot.navball_enabled


class FlightDataController:
    """Glue between the host's frame callbacks and the engine.

    The host calls :meth:`fixed_update` on every physics step and
    :meth:`late_update` once per rendered frame.  Derivation happens at most
    every ``update_interval`` seconds of unscaled wall time; between two
    derivations the last commands stay on screen.

    The controller is enabled only while the toolbar toggle is on and the
    host GUI is visible.  Enabling forces a full update on the next frame;
    disabling hides every readout immediately.
    """

    def __init__(
        self,
        sink: RenderSink,
        *,
        aerodynamics: Optional[AerodynamicsProvider] = None,
        thresholds: WarningThresholds = DEFAULT_THRESHOLDS,
        time_units: Optional[TimeUnits] = None,
        settings: Optional[DisplaySettings] = None,
        settings_path: Optional[Path] = None,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
    ) -> None:
        if update_interval <= 0.0:
            raise ValueError("update_interval must be positive")
        self.sink = sink
        self.deriver = TelemetryDeriver(aerodynamics=aerodynamics, thresholds=thresholds)
        self.policy = DisplayPolicy(time_units)
        self.settings = settings or DisplaySettings()
        self.settings_path = settings_path
        self.update_interval = update_interval
        self._gui_visible = True
        self._displaying = False
        self._recording = False
        self._since_update = math.inf
        self._enabled = False
        self._apply_enablement()

    @classmethod
    def from_config(
        cls,
        sink: RenderSink,
        config: Optional[Mapping[str, Any]] = None,
        *,
        settings_path: Optional[Path] = None,
        **kwargs: Any,
    ) -> "FlightDataController":
        """Build a controller from project configuration and a settings file.

        An unreadable settings file is logged and replaced by the defaults of
        the ``display`` table so that the HUD still comes up.
        """

        settings = DisplaySettings.from_config(config)
        if settings_path is not None:
            try:
                if Path(settings_path).expanduser().exists():
                    settings = load_settings(settings_path)
            except SettingsError as exc:
                logger.warning(
                    "Falling back to default display settings.",
                    extra={
                        "event": "settings.load_failed",
                        "path": str(settings_path),
                        "error": str(exc),
                    },
                )
        thresholds = WarningThresholds.from_config(config)
        return cls(
            sink,
            thresholds=thresholds,
            settings=settings,
            settings_path=settings_path,
            **kwargs,
        )

    # -- enablement -----------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def displaying(self) -> bool:
        return self._displaying

    @property
    def recording(self) -> bool:
        return self._recording

    def set_gui_visible(self, visible: bool) -> None:
        self._gui_visible = bool(visible)
        self._apply_enablement()

    def set_toolbar_active(self, active: bool) -> None:
        self.settings = replace(self.settings, active=bool(active))
        self._apply_enablement()

    def toggle_toolbar(self) -> bool:
        self.set_toolbar_active(not self.settings.active)
        return self.settings.active

    def _apply_enablement(self) -> None:
        enabled = self.settings.active and self._gui_visible
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if enabled:
            self._since_update = math.inf
        else:
            self._stop_display()

    # -- frame callbacks ------------------------------------------------

    def fixed_update(
        self, snapshot: Optional[VesselSnapshot], step: Optional[float] = None
    ) -> None:
        """Sample one physics step; ``step`` overrides the snapshot step length."""

        if snapshot is None:
            self.deriver.pause_kinematics()
            return
        self.deriver.sample_kinematics(snapshot, recording=self._recording, step=step)

    def late_update(
        self,
        snapshot: Optional[VesselSnapshot],
        dt: float,
        view: Optional[ViewContext] = None,
    ) -> Optional[List[RenderCommand]]:
        """Advance the wall clock by ``dt`` and refresh the HUD when due.

        Returns the commands handed to the sink, or ``None`` when nothing was
        rendered this frame.
        """

        if not self._enabled:
            return None
        self._since_update += max(dt, 0.0)

        if not should_display(snapshot):
            if self._displaying:
                return self._stop_display()
            self._recording = False
            return None

        self._displaying = True
        self._recording = True
        if self._since_update < self.update_interval:
            return None
        self._since_update = 0.0

        data = self.deriver.derive(snapshot)
        commands = self.policy.evaluate(data, view)
        self.sink.render(commands)
        return commands

    def _stop_display(self) -> List[RenderCommand]:
        self._displaying = False
        self._recording = False
        self.deriver.pause_kinematics()
        commands = self.policy.hide_all()
        self.sink.render(commands)
        return commands

    # -- lifecycle ------------------------------------------------------

    def shutdown(self) -> Optional[Path]:
        """Hide the HUD and persist the display settings when a path is set."""

        if self._displaying:
            self._stop_display()
        if self.settings_path is None:
            return None
        return save_settings(self.settings, self.settings_path)
