from frame_scheduler import FrameScheduler


def test_callbacks_fire_once_in_registration_order():
    scheduler = FrameScheduler()
    fired = []
    scheduler.request_frame(lambda t: fired.append(("a", t)))
    scheduler.request_frame(lambda t: fired.append(("b", t)))

    assert scheduler.run_frame(16.0) == 2
    assert scheduler.run_frame(32.0) == 0
    assert fired == [("a", 16.0), ("b", 16.0)]


def test_callbacks_requested_during_a_frame_wait_for_the_next():
    scheduler = FrameScheduler()
    ticks = []

    def tick(t):
        ticks.append(t)
        scheduler.request_frame(tick)

    scheduler.request_frame(tick)
    scheduler.run_frame(1)
    scheduler.run_frame(2)

    assert ticks == [1, 2]
    assert scheduler.pending == 1


def test_cancel_frame():
    scheduler = FrameScheduler()
    fired = []
    handle = scheduler.request_frame(fired.append)

    scheduler.cancel_frame(handle)
    scheduler.cancel_frame(handle)
    scheduler.cancel_frame(12345)

    assert scheduler.run_frame(0) == 0
    assert fired == []


def test_callback_can_cancel_another_in_the_same_frame():
    scheduler = FrameScheduler()
    fired = []
    handles = {}
    handles["first"] = scheduler.request_frame(lambda t: scheduler.cancel_frame(handles["second"]))
    handles["second"] = scheduler.request_frame(lambda t: fired.append(t))

    assert scheduler.run_frame(0) == 1
    assert fired == []
