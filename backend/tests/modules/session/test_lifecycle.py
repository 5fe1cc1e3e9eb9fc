import pytest

from modules.session import AppState, AppStateChannel


class TestAppStateChannel:
    @pytest.mark.asyncio
    async def test_publish_reaches_listeners_in_order(self):
        """Listeners should be awaited in registration order."""
        channel = AppStateChannel()
        calls = []

        async def first(state):
            calls.append(("first", state))

        async def second(state):
            calls.append(("second", state))

        channel.add_listener(first)
        channel.add_listener(second)
        await channel.publish(AppState.BACKGROUND)

        assert calls == [("first", AppState.BACKGROUND), ("second", AppState.BACKGROUND)]
        assert channel.current is AppState.BACKGROUND

    @pytest.mark.asyncio
    async def test_subscription_remove(self):
        """Removed listeners should not be called; removing twice is safe."""
        channel = AppStateChannel()
        calls = []

        async def listener(state):
            calls.append(state)

        subscription = channel.add_listener(listener)
        subscription.remove()
        subscription.remove()
        await channel.publish(AppState.INACTIVE)

        assert calls == []
        assert subscription.active is False
        assert channel.listener_count == 0

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self, caplog):
        """A listener error should be logged and the rest still run."""
        channel = AppStateChannel()
        calls = []

        async def broken(state):
            raise RuntimeError("boom")

        async def healthy(state):
            calls.append(state)

        channel.add_listener(broken)
        channel.add_listener(healthy)

        with caplog.at_level("ERROR", logger="modules.session.lifecycle"):
            await channel.publish(AppState.BACKGROUND)

        assert calls == [AppState.BACKGROUND]
        assert "boom" in caplog.text

    def test_initial_state(self):
        """Channels start active unless told otherwise."""
        assert AppStateChannel().current is AppState.ACTIVE
        assert AppStateChannel(AppState.BACKGROUND).current is AppState.BACKGROUND
