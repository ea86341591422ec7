"""
Tests for the asyncio-backed delayed task scheduler.
"""
import asyncio
import unittest

from trivia.scheduler import TICK_SECONDS, AsyncioScheduler, seconds_to_ticks


class TestSecondsToTicks(unittest.TestCase):

    def test_conversion(self):
        self.assertEqual(TICK_SECONDS, 0.05)
        self.assertEqual(seconds_to_ticks(0), 0)
        self.assertEqual(seconds_to_ticks(-2), 0)
        self.assertEqual(seconds_to_ticks(0.05), 1)
        self.assertEqual(seconds_to_ticks(0.051), 2)
        self.assertEqual(seconds_to_ticks(1.0), 20)


class TestAsyncioScheduler(unittest.IsolatedAsyncioTestCase):

    async def test_runs_callback_later(self):
        scheduler = AsyncioScheduler()
        fired = asyncio.Event()

        async def callback():
            fired.set()

        scheduler.run_delayed(callback, 1)
        self.assertFalse(fired.is_set())
        self.assertEqual(scheduler.pending_count, 1)

        await asyncio.wait_for(fired.wait(), timeout=2)
        await asyncio.sleep(0.01)
        self.assertEqual(scheduler.pending_count, 0)

    async def test_failures_are_logged_not_raised(self):
        scheduler = AsyncioScheduler()

        async def failing():
            raise ValueError("boom")

        with self.assertLogs("trivia.scheduler", level="ERROR") as logs:
            scheduler.run_delayed(failing, 0)
            await asyncio.sleep(0.1)

        self.assertIn("failing", logs.output[0])
        self.assertEqual(scheduler.pending_count, 0)

    async def test_cancel_all(self):
        scheduler = AsyncioScheduler()
        fired = []

        async def callback():
            fired.append(True)

        scheduler.run_delayed(callback, 2)
        scheduler.cancel_all()
        await asyncio.sleep(0.2)

        self.assertEqual(fired, [])
        self.assertEqual(scheduler.pending_count, 0)

    async def test_schedule_from_worker_thread(self):
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(loop)
        fired = asyncio.Event()

        async def callback():
            fired.set()

        await loop.run_in_executor(None, scheduler.run_delayed, callback, 0)
        await asyncio.wait_for(fired.wait(), timeout=2)


if __name__ == '__main__':
    unittest.main()
