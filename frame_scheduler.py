# frame_scheduler.py
"""
Per-frame callback scheduling.

The host loop pumps a FrameScheduler once per display refresh. Anything
that wants to run on the next frame registers a one-shot callback, and a
continuous animation re-registers itself from inside its own callback.
"""
from typing import Callable, Dict

FrameCallback = Callable[[float], None]

# --- Data Contracts ---
#
# class FrameScheduler:
#   - request_frame(self, callback) -> int:
#     - Outputs: A handle that can be passed to cancel_frame.
#   - cancel_frame(self, handle: int) -> None:
#     - Side Effects: The callback will not fire. Unknown handles are ignored.
#   - run_frame(self, timestamp: float) -> int:
#     - Outputs: The number of callbacks fired.
#     - Invariants: Only callbacks registered before the call fire.
#       Callbacks registered during the call wait for the next frame.


class FrameScheduler:
    """
    Queue of one-shot callbacks fired once per display frame.
    """
    def __init__(self):
        self._callbacks: Dict[int, FrameCallback] = {}
        self._batch: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int):
        self._callbacks.pop(handle, None)
        # A callback may cancel another one queued for the same frame.
        self._batch.pop(handle, None)

    def run_frame(self, timestamp: float) -> int:
        """
        Fires every callback that was pending when the frame started.

        Args:
            timestamp (float): Frame time in milliseconds, passed through.
        """
        self._batch, self._callbacks = self._callbacks, {}
        fired = 0
        while self._batch:
            handle = next(iter(self._batch))
            callback = self._batch.pop(handle)
            callback(timestamp)
            fired += 1
        return fired
