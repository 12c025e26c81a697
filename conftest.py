"""Shared helpers for the gesture listener tests."""

from gesture_listener.config.commands import DispatchResult


class RecordingResolver:
    """Stands in for CommandResolver and records every trigger."""

    def __init__(self, bound=None, bind_all=False):
        self.bound = set(bound or [])
        self.bind_all = bind_all
        self.calls = []
        self.switches = []

    def resolve_and_run(self, fingers, family, code):
        self.calls.append((fingers, family, int(code)))
        if self.bind_all or (family, int(code)) in self.bound:
            return DispatchResult.DISPATCHED
        return DispatchResult.NO_COMMAND_BOUND

    def run_switch_command(self, state):
        self.switches.append(state)
        return DispatchResult.DISPATCHED

    def families(self):
        return [family for _, family, _ in self.calls]
