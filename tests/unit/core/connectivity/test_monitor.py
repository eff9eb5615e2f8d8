"""Tests for the ConnectivityMonitor."""

import logging

import pytest

from linkwatch.core.connectivity import ConnectivityMonitor
from linkwatch.core.events import EventDispatcher, EventKind
from linkwatch.domain.config import ProbeSchedule
from linkwatch.domain.entities import ConnectionState, NetworkStatus, Reachability
from tests.helpers.fakes import EventRecorder, ManualClock, ScriptedProbe


@pytest.fixture
def monitor(
    clock: ManualClock, probe: ScriptedProbe, dispatcher: EventDispatcher
) -> ConnectivityMonitor:
    return ConnectivityMonitor(clock, probe, dispatcher)


class TestInitialState:
    """Tests for a freshly constructed monitor."""

    def test_starts_online(self, monitor: ConnectivityMonitor) -> None:
        assert monitor.state is ConnectionState.ONLINE
        assert monitor.is_online() is True
        assert monitor.status() is NetworkStatus.ONLINE

    def test_timestamps_start_at_construction_time(
        self, probe: ScriptedProbe, dispatcher: EventDispatcher
    ) -> None:
        clock = ManualClock(start=42.0)
        monitor = ConnectivityMonitor(clock, probe, dispatcher)
        assert monitor.state_entered_at == 42.0
        assert monitor.last_probe_at == 42.0

    def test_construction_does_not_probe(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        assert probe.calls == 0


class TestTick:
    """Tests for the adaptive tick loop."""

    def test_no_probe_before_first_interval(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        assert monitor.tick(4.9) is False
        assert probe.calls == 0

    def test_probes_when_interval_elapsed(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        assert monitor.tick(5.0) is True
        assert probe.calls == 1
        assert monitor.last_probe_at == 5.0

    def test_interval_measured_from_last_probe(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        monitor.tick(5.0)
        monitor.tick(9.0)
        assert probe.calls == 1
        monitor.tick(10.0)
        assert probe.calls == 2

    def test_disabled_detection_is_a_noop(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        monitor.enabled = False
        assert monitor.tick(10_000.0) is False
        assert probe.calls == 0
        assert monitor.last_probe_at == 0.0

    def test_interval_backs_off_with_time_in_state(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        """After a minute in the same state, probes every 10s instead of 5s."""
        monitor.tick(60.0)
        assert probe.calls == 1
        monitor.tick(65.0)
        assert probe.calls == 1
        monitor.tick(70.0)
        assert probe.calls == 2

    def test_long_stable_state_uses_hourly_interval(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        monitor.tick(36_000.0)
        assert probe.calls == 1
        monitor.tick(36_000.0 + 3599.0)
        assert probe.calls == 1
        monitor.tick(36_000.0 + 3600.0)
        assert probe.calls == 2

    def test_state_change_resets_back_off(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
    ) -> None:
        """A transition makes probing frequent again."""
        monitor.tick(4000.0)
        probe.result = Reachability.UNREACHABLE
        monitor.tick(4600.0)  # 600s interval at >1h in state
        assert monitor.state is ConnectionState.OFFLINE
        assert monitor.state_entered_at == 4600.0

        calls = probe.calls
        monitor.tick(4605.0)
        assert probe.calls == calls + 1

    def test_custom_schedule_is_used(
        self, clock: ManualClock, probe: ScriptedProbe, dispatcher: EventDispatcher
    ) -> None:
        schedule = ProbeSchedule(thresholds=(10, 20, 30, 40), intervals=(2, 4, 6, 8, 10))
        monitor = ConnectivityMonitor(clock, probe, dispatcher, schedule=schedule)
        monitor.tick(1.0)
        assert probe.calls == 0
        monitor.tick(2.0)
        assert probe.calls == 1

    def test_schedule_can_be_swapped_at_runtime(
        self, monitor: ConnectivityMonitor, probe: ScriptedProbe
    ) -> None:
        monitor.schedule = ProbeSchedule(intervals=(1, 1, 1, 1, 1))
        monitor.tick(1.0)
        assert probe.calls == 1


class TestProbe:
    """Tests for probe evaluation and notifications."""

    def test_going_offline_publishes_connectivity_lost_and_status(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        recorder: EventRecorder,
    ) -> None:
        probe.result = Reachability.UNREACHABLE
        monitor.probe(30.0)

        assert recorder.events == [
            (EventKind.CONNECTIVITY_CHANGED, (False,)),
            (EventKind.CONNECTION_LOST, ()),
            (EventKind.STATUS_CHANGED, (NetworkStatus.OFFLINE_NO_DATA,)),
        ]

    def test_coming_back_online_publishes_restored(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        recorder: EventRecorder,
    ) -> None:
        probe.result = Reachability.UNREACHABLE
        monitor.probe(30.0)
        recorder.clear()

        probe.result = Reachability.REACHABLE_REMOTE
        monitor.probe(40.0)

        assert recorder.events == [
            (EventKind.CONNECTIVITY_CHANGED, (True,)),
            (EventKind.CONNECTION_RESTORED, ()),
            (EventKind.STATUS_CHANGED, (NetworkStatus.ONLINE,)),
        ]
        assert monitor.state_entered_at == 40.0

    def test_repeated_probe_with_same_result_is_silent(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        recorder: EventRecorder,
    ) -> None:
        """A second probe with an unchanged classification emits nothing."""
        probe.result = Reachability.UNREACHABLE
        monitor.probe(30.0)
        count = len(recorder.events)

        monitor.probe(35.0)

        assert len(recorder.events) == count
        assert monitor.state_entered_at == 30.0

    def test_confirming_online_keeps_state_entry_time(
        self, monitor: ConnectivityMonitor, recorder: EventRecorder
    ) -> None:
        monitor.probe(100.0)
        assert monitor.state_entered_at == 0.0
        assert recorder.events == []

    def test_switching_reachable_transport_is_not_a_transition(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        recorder: EventRecorder,
    ) -> None:
        probe.result = Reachability.REACHABLE_REMOTE
        monitor.probe(10.0)
        probe.result = Reachability.REACHABLE_LOCAL
        monitor.probe(20.0)
        assert recorder.events == []
        assert monitor.state_entered_at == 0.0

    def test_unknown_classification_keeps_state(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        recorder: EventRecorder,
    ) -> None:
        probe.result = Reachability.UNREACHABLE
        monitor.probe(10.0)
        recorder.clear()

        probe.result = Reachability.UNKNOWN
        monitor.probe(20.0)

        assert monitor.state is ConnectionState.OFFLINE
        assert monitor.state_entered_at == 10.0
        assert recorder.events == []

    def test_offline_status_reflects_pending_sync(
        self, clock: ManualClock, probe: ScriptedProbe, dispatcher: EventDispatcher
    ) -> None:
        recorder = EventRecorder(dispatcher)
        monitor = ConnectivityMonitor(
            clock, probe, dispatcher, has_pending_sync=lambda: True
        )
        probe.result = Reachability.UNREACHABLE
        monitor.probe(30.0)

        assert recorder.of(EventKind.STATUS_CHANGED) == [(NetworkStatus.OFFLINE_PENDING,)]
        assert monitor.status() is NetworkStatus.OFFLINE_PENDING

    def test_status_change_without_connectivity_change(
        self, clock: ManualClock, probe: ScriptedProbe, dispatcher: EventDispatcher
    ) -> None:
        """Pending flag flipping while offline is reported on the next probe."""
        pending = {"value": False}
        recorder = EventRecorder(dispatcher)
        monitor = ConnectivityMonitor(
            clock, probe, dispatcher, has_pending_sync=lambda: pending["value"]
        )
        probe.result = Reachability.UNREACHABLE
        monitor.probe(10.0)
        recorder.clear()

        pending["value"] = True
        monitor.probe(20.0)

        # previous status is computed before the probe, so the flip is seen
        # as already current and no STATUS_CHANGED fires
        assert recorder.events == []
        assert monitor.status() is NetworkStatus.OFFLINE_PENDING

    def test_force_probe_now_uses_clock(
        self,
        monitor: ConnectivityMonitor,
        clock: ManualClock,
        probe: ScriptedProbe,
    ) -> None:
        clock.set(123.0)
        probe.result = Reachability.UNREACHABLE
        monitor.force_probe_now()
        assert probe.calls == 1
        assert monitor.state_entered_at == 123.0
        assert monitor.last_probe_at == 0.0


class TestScenarioA:
    """Monitor starts online at t=0, probe fails at t=30."""

    def test_goes_offline_at_thirty_seconds(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        recorder: EventRecorder,
    ) -> None:
        for t in (5.0, 10.0, 15.0, 20.0, 25.0):
            monitor.tick(t)
        assert monitor.is_online()

        probe.result = Reachability.UNREACHABLE
        monitor.tick(30.0)

        assert monitor.state is ConnectionState.OFFLINE
        assert recorder.of(EventKind.CONNECTIVITY_CHANGED) == [(False,)]
        assert recorder.count(EventKind.CONNECTION_LOST) == 1
        assert recorder.of(EventKind.STATUS_CHANGED) == [(NetworkStatus.OFFLINE_NO_DATA,)]


class TestLogging:
    """Tests for warning toggles."""

    def test_connection_lost_logs_warning(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        probe.result = Reachability.UNREACHABLE
        with caplog.at_level(logging.WARNING, logger="linkwatch"):
            monitor.probe(1.0)
        assert "NO INTERNET" in caplog.text

    def test_warnings_can_be_disabled(
        self,
        monitor: ConnectivityMonitor,
        probe: ScriptedProbe,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monitor.show_network_warnings = False
        probe.result = Reachability.UNREACHABLE
        with caplog.at_level(logging.WARNING, logger="linkwatch"):
            monitor.probe(1.0)
        assert "NO INTERNET" not in caplog.text
