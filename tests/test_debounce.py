import asyncio

from luatool_lsp.debounce import DebounceScheduler


def _recorder():
    calls = []

    def callback(uri, payload):
        calls.append((uri, payload))

    return calls, callback


def test_burst_collapses_to_last_payload():
    calls, callback = _recorder()

    async def scenario():
        sched = DebounceScheduler(callback, delay_ms=50)
        for i in range(5):
            sched.schedule("file:///a.lua", f"v{i}")
            await asyncio.sleep(0.001)
        assert len(sched) == 1
        await asyncio.sleep(0.2)
        return sched

    sched = asyncio.run(scenario())
    assert calls == [("file:///a.lua", "v4")]
    assert len(sched) == 0


def test_documents_do_not_cancel_each_other():
    calls, callback = _recorder()

    async def scenario():
        sched = DebounceScheduler(callback, delay_ms=10)
        sched.schedule("file:///a.lua", "a")
        sched.schedule("file:///b.lua", "b")
        assert len(sched) == 2
        await asyncio.sleep(0.06)

    asyncio.run(scenario())
    assert sorted(calls) == [("file:///a.lua", "a"), ("file:///b.lua", "b")]


def test_disabled_scheduler_is_a_no_op():
    calls, callback = _recorder()

    async def scenario():
        sched = DebounceScheduler(callback, delay_ms=0, enabled=lambda: False)
        assert sched.schedule("file:///a.lua", "a") is False
        assert not sched.pending("file:///a.lua")
        await asyncio.sleep(0.02)

    asyncio.run(scenario())
    assert calls == []


def test_entry_is_removed_before_callback_runs():
    seen = []

    async def scenario():
        sched = None

        def callback(uri, payload):
            seen.append(sched.pending(uri))

        sched = DebounceScheduler(callback, delay_ms=0)
        sched.schedule("file:///a.lua", "a")
        await asyncio.sleep(0.02)

    asyncio.run(scenario())
    assert seen == [False]


def test_change_during_inflight_call_schedules_again():
    calls = []

    async def scenario():
        started = asyncio.Event()
        release = asyncio.Event()

        async def callback(uri, payload):
            calls.append(payload)
            started.set()
            if payload == "first":
                await release.wait()

        sched = DebounceScheduler(callback, delay_ms=0)
        sched.schedule("file:///a.lua", "first")
        await started.wait()
        # first call is still in flight; a new change must be accepted
        assert sched.schedule("file:///a.lua", "second") is True
        await asyncio.sleep(0.02)
        release.set()
        await sched.drain()

    asyncio.run(scenario())
    assert calls == ["first", "second"]


def test_cancel_drops_pending_call():
    calls, callback = _recorder()

    async def scenario():
        sched = DebounceScheduler(callback, delay_ms=10)
        sched.schedule("file:///a.lua", "a")
        assert sched.cancel("file:///a.lua") is True
        assert sched.cancel("file:///a.lua") is False
        await asyncio.sleep(0.04)

    asyncio.run(scenario())
    assert calls == []


def test_failing_callback_does_not_break_scheduler():
    calls = []

    async def scenario():
        async def callback(uri, payload):
            calls.append(payload)
            if payload == "bad":
                raise RuntimeError("tool crashed")

        sched = DebounceScheduler(callback, delay_ms=0)
        sched.schedule("file:///a.lua", "bad")
        await asyncio.sleep(0.02)
        await sched.drain()
        sched.schedule("file:///a.lua", "good")
        await asyncio.sleep(0.02)
        await sched.drain()

    asyncio.run(scenario())
    assert calls == ["bad", "good"]
